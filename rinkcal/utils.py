from __future__ import annotations

import calendar
import os
import pathlib
from datetime import date, datetime, timedelta
from typing import Any

import orjson


def read_json(path: str | pathlib.Path) -> Any:
    with open(path, "rb") as f:
        return orjson.loads(f.read())


def dumps(data) -> bytes:
    return orjson.dumps(data, option=orjson.OPT_INDENT_2)


def read_env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(name, default)


def iso_day(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def parse_day(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def week_start(d: date) -> date:
    # Sunday on or before d (weekday(): Monday=0 .. Sunday=6)
    return d - timedelta(days=(d.weekday() + 1) % 7)


def days_from(start: date, count: int) -> list[date]:
    return [start + timedelta(days=i) for i in range(count)]


def month_days(d: date) -> list[date]:
    _, last = calendar.monthrange(d.year, d.month)
    return days_from(d.replace(day=1), last)
