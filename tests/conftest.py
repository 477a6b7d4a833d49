"""Shared fakes for the loader tests."""
import asyncio
from typing import Dict, List, Optional

import pytest

from rinkcal.errors import SourceError
from rinkcal.models import RawEvent, RawTeam
from rinkcal.utils import iso_day


def raw_event(
    event_id,
    start="2025-11-04T19:00:00",
    end="2025-11-04T20:00:00",
    resource_id=24,
    event_type="g",
    hteam=None,
    vteam=None,
    publish=True,
    description=None,
) -> dict:
    return {
        "type": "events",
        "id": str(event_id),
        "attributes": {
            "resource_id": resource_id,
            "event_type_id": event_type,
            "start": start,
            "end": end,
            "hteam_id": hteam,
            "vteam_id": vteam,
            "publish": publish,
            "best_description": description,
        },
    }


def raw_team(team_id, name, short_name=None) -> dict:
    attrs = {"name": name}
    if short_name is not None:
        attrs["short_name"] = short_name
    return {"type": "teams", "id": str(team_id), "attributes": attrs}


def event(event_id, **kwargs) -> RawEvent:
    return RawEvent.model_validate(raw_event(event_id, **kwargs))


def team(team_id, name, short_name=None) -> RawTeam:
    return RawTeam.model_validate(raw_team(team_id, name, short_name))


class FakeSource:
    """In-memory source that records every read."""

    def __init__(
        self,
        events: Optional[Dict[str, List[dict]]] = None,
        teams: Optional[Dict[int, dict]] = None,
        broken_days=(),
        exploding_days=(),
        broken_teams=(),
    ):
        self.events = events or {}
        self.teams = teams or {}
        self.broken_days = set(broken_days)
        self.exploding_days = set(exploding_days)
        self.broken_teams = set(broken_teams)
        self.event_calls: List[str] = []
        self.team_calls: List[int] = []

    async def read_events(self, day):
        key = iso_day(day)
        self.event_calls.append(key)
        await asyncio.sleep(0)
        if key in self.broken_days:
            raise SourceError(key, "connection reset")
        if key in self.exploding_days:
            raise RuntimeError(f"unexpected failure for {key}")
        return self.events.get(key)

    async def read_team(self, team_id):
        self.team_calls.append(team_id)
        await asyncio.sleep(0)
        if team_id in self.broken_teams:
            raise SourceError(team_id, "bad json")
        return self.teams.get(team_id)

    async def aclose(self):
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None


@pytest.fixture
def fake_source():
    return FakeSource()
