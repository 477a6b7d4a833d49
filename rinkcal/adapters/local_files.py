from __future__ import annotations

import asyncio
import pathlib
from datetime import date
from typing import Any, Optional

import orjson

from ..errors import SourceError
from ..utils import iso_day


def _read(path: pathlib.Path, key: Any) -> Optional[Any]:
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise SourceError(key, e) from e
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise SourceError(key, e) from e


def unwrap(payload: Any) -> Any:
    # Files saved straight from the API keep the {"data": ...} envelope.
    if isinstance(payload, dict) and "data" in payload and "attributes" not in payload:
        return payload["data"]
    return payload


class LocalFileSource:
    """Reads ``events/YYYY-MM-DD.json`` and ``teams/<id>.json`` under *root*."""

    def __init__(self, root: str | pathlib.Path) -> None:
        self.root = pathlib.Path(root)

    def events_path(self, day: date) -> pathlib.Path:
        return self.root / "events" / f"{iso_day(day)}.json"

    def team_path(self, team_id: int) -> pathlib.Path:
        return self.root / "teams" / f"{team_id}.json"

    async def read_events(self, day: date) -> Optional[list[dict]]:
        payload = await asyncio.to_thread(_read, self.events_path(day), iso_day(day))
        if payload is None:
            return None
        payload = unwrap(payload)
        if not isinstance(payload, list):
            raise SourceError(iso_day(day), "event file is not a JSON array")
        return payload

    async def read_team(self, team_id: int) -> Optional[dict]:
        payload = await asyncio.to_thread(_read, self.team_path(team_id), team_id)
        if payload is None:
            return None
        payload = unwrap(payload)
        if not isinstance(payload, dict):
            raise SourceError(team_id, "team file is not a JSON object")
        return payload

    async def aclose(self) -> None:
        return None

    async def __aenter__(self) -> "LocalFileSource":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
