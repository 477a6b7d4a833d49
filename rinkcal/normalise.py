from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Mapping, Sequence

from dateutil import parser as dtparser

from .categories import DEFAULT_RULES, classify
from .constants import (
    EVENT_TYPE_NAMES,
    FALLBACK_TITLE,
    ORG_PREFIX,
    RINK_NAMES,
)
from .models import CategoryRule, EventType, NormalizedEvent, RawEvent
from .teams import TeamMap, display_name

_MIDNIGHT = time(0, 0)


def parse_local(value: str) -> datetime:
    # Wall-clock time as published; any offset is dropped, never converted.
    return dtparser.isoparse(value).replace(tzinfo=None)


def correct_midnight_end(end: datetime) -> datetime:
    """Pull an end of exactly 00:00:00.000 back into the previous day by 1ms."""
    if end.time() == _MIDNIGHT:
        return end - timedelta(milliseconds=1)
    return end


def event_type_of(code: str) -> EventType:
    return EVENT_TYPE_NAMES.get(code, "other")  # type: ignore[return-value]


def rink_name(resource_id: int, rink_names: Mapping[int, str] = RINK_NAMES) -> str:
    return rink_names.get(resource_id) or f"Resource {resource_id}"


def build_title(
    event: RawEvent,
    teams: TeamMap,
    rink_names: Mapping[int, str] = RINK_NAMES,
    org_prefix: str = ORG_PREFIX,
) -> str:
    attrs = event.attributes
    kind = event_type_of(attrs.event_type_id)
    home = display_name(teams.get(attrs.hteam_id), org_prefix) if attrs.hteam_id else None

    if kind == "game":
        if attrs.hteam_id and attrs.vteam_id:
            visitor = display_name(teams.get(attrs.vteam_id), org_prefix)
            return f"({rink_name(attrs.resource_id, rink_names)}) {visitor} @ {home}"
        if home:
            return f"{home} - Game"
        return "Game"
    if kind == "session":
        return home or "Session"
    return home or FALLBACK_TITLE


def normalize(
    event: RawEvent,
    teams: TeamMap,
    rink_names: Mapping[int, str] = RINK_NAMES,
    rules: Sequence[CategoryRule] = DEFAULT_RULES,
    org_prefix: str = ORG_PREFIX,
) -> NormalizedEvent:
    attrs = event.attributes
    home_team = teams.get(attrs.hteam_id) if attrs.hteam_id else None
    return NormalizedEvent(
        id=event.id,
        title=build_title(event, teams, rink_names, org_prefix),
        start=parse_local(attrs.start),
        end=correct_midnight_end(parse_local(attrs.end)),
        resource_id=attrs.resource_id,
        resource_name=rink_name(attrs.resource_id, rink_names),
        event_type=event_type_of(attrs.event_type_id),
        home_team_id=attrs.hteam_id,
        visiting_team_id=attrs.vteam_id,
        description=attrs.best_description or None,
        category=classify(event, home_team, rules),
        is_published=attrs.publish,
        raw=event,
    )


def normalize_all(events, teams: TeamMap, **kwargs) -> list[NormalizedEvent]:
    return [normalize(e, teams, **kwargs) for e in events]

