from __future__ import annotations

import argparse
import asyncio
import logging
import pathlib
import sys
from typing import List

import orjson
from pydantic import ValidationError

from .adapters import make_source
from .adapters.local_files import unwrap
from .categories import registration_url
from .config import Settings, load_config
from .errors import RangeLoadError
from .loader import Granularity, RangeLoader
from .models import NormalizedEvent, RawEvent, RawTeam
from .utils import dumps, parse_day, read_json

logger = logging.getLogger("rinkcal")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def event_payload(event: NormalizedEvent, settings: Settings) -> dict:
    data = event.model_dump(mode="json")
    data["registration_url"] = registration_url(
        event,
        settings.categories,
        base_url=settings.registration_base_url,
        facility_id=settings.facility_id,
    )
    return data


async def _load(settings: Settings, day, view: Granularity) -> List[NormalizedEvent]:
    async with make_source(settings) as source:
        loader = RangeLoader(source, settings, prefetch=False)
        return await loader.load(day, view)


def load_cmd(settings: Settings, day: str, view: str) -> None:
    try:
        events = asyncio.run(_load(settings, parse_day(day), Granularity(view)))
    except RangeLoadError:
        logger.exception("Error loading events")
        raise SystemExit(1)
    sys.stdout.buffer.write(dumps([event_payload(e, settings) for e in events]) + b"\n")


def categories_cmd(settings: Settings) -> None:
    sys.stdout.buffer.write(dumps([c.model_dump() for c in settings.categories]) + b"\n")


def validate_cmd(settings: Settings) -> None:
    root = pathlib.Path(settings.data_dir)
    ok = True
    for path in sorted((root / "events").glob("*.json")):
        try:
            items = unwrap(read_json(path))
            if not isinstance(items, list):
                print(f"{path.name} not a list")
                ok = False
                continue
            for item in items:
                RawEvent.model_validate(item)
        except (orjson.JSONDecodeError, ValidationError) as e:
            print(f"events/{path.name}: {e}")
            ok = False
    for path in sorted((root / "teams").glob("*.json")):
        try:
            RawTeam.model_validate(unwrap(read_json(path)))
        except (orjson.JSONDecodeError, ValidationError) as e:
            print(f"teams/{path.name}: {e}")
            ok = False
    if not ok:
        raise SystemExit(1)
    print("ok")


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="rinkcal", description="Rink schedule loader")
    parser.add_argument("--config", default=None, help="YAML settings file")
    parser.add_argument("--data-dir", default=None)
    parser.add_argument("--base-url", default=None)
    sub = parser.add_subparsers(dest="cmd", required=True)
    p_load = sub.add_parser("load")
    p_load.add_argument("--date", required=True, help="YYYY-MM-DD")
    p_load.add_argument("--view", default="day", choices=[g.value for g in Granularity])
    sub.add_parser("categories")
    sub.add_parser("validate")
    args = parser.parse_args(argv)

    settings = load_config(args.config)
    if args.data_dir:
        settings.data_dir = args.data_dir
    if args.base_url:
        settings.base_url = args.base_url
    setup_logging(settings.log_level)

    if args.cmd == "load":
        load_cmd(settings, args.date, args.view)
    elif args.cmd == "categories":
        categories_cmd(settings)
    elif args.cmd == "validate":
        validate_cmd(settings)


if __name__ == "__main__":
    main()
