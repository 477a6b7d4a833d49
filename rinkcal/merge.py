from __future__ import annotations

import os
import re
from datetime import datetime
from typing import Iterable, List, Sequence, Tuple

from .constants import FALLBACK_TITLE, ORG_PREFIX
from .models import NormalizedEvent
from .teams import TeamMap, display_name

SlotKey = Tuple[datetime, datetime, int]

_TRAILING_SEP_RE = re.compile(r"\s*[-–—]\s*$")


def slot_key(event: NormalizedEvent) -> SlotKey:
    return (event.start, event.end, event.resource_id)


def slot_id(key: SlotKey) -> str:
    start, end, resource_id = key
    return f"dedup-{start.isoformat()}-{end.isoformat()}-{resource_id}"


def common_prefix_title(names: Sequence[str]) -> str:
    """Longest shared prefix of *names* with trailing separators trimmed.

    Falls back to the first name when nothing is shared and to "Event" when
    there are no names at all.
    """
    if not names:
        return FALLBACK_TITLE
    if len(names) == 1:
        return names[0]
    prefix = os.path.commonprefix(list(names))
    if not prefix:
        return names[0]
    return _TRAILING_SEP_RE.sub("", prefix).strip()


def others_suffix(count: int) -> str:
    others = count - 1
    return f" (+{others} other{'s' if others != 1 else ''})"


def _home_names(group: Iterable[NormalizedEvent], teams: TeamMap, org_prefix: str) -> List[str]:
    names: List[str] = []
    for e in group:
        team = teams.get(e.home_team_id) if e.home_team_id else None
        if team is None:
            continue
        name = display_name(team, org_prefix)
        if name:
            names.append(name)
    return names


def merge_slot(
    key: SlotKey,
    group: List[NormalizedEvent],
    teams: TeamMap,
    org_prefix: str = ORG_PREFIX,
) -> NormalizedEvent:
    first = group[0]
    title = common_prefix_title(_home_names(group, teams, org_prefix))
    if len(group) > 1:
        title += others_suffix(len(group))
    return first.model_copy(
        update={
            "id": slot_id(key),
            "title": title,
            "variants": list(group),
            "is_deduplicated": True,
        }
    )


def deduplicate(
    events: Iterable[NormalizedEvent],
    teams: TeamMap,
    org_prefix: str = ORG_PREFIX,
) -> List[NormalizedEvent]:
    """Fold events sharing a (start, end, rink) slot into one merged event.

    Groups keep first-appearance order, as do the variants inside a group.
    """
    by_key: dict[SlotKey, List[NormalizedEvent]] = {}
    for e in events:
        by_key.setdefault(slot_key(e), []).append(e)

    merged: List[NormalizedEvent] = []
    for key, group in by_key.items():
        if len(group) == 1:
            merged.append(group[0])
        else:
            merged.append(merge_slot(key, group, teams, org_prefix))
    return merged
