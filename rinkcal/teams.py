"""Team lookup.

Teams are memoized by numeric id for the lifetime of the resolver. A team
that cannot be found or read is cached as ``None``; in a team map a key that
is missing means "not loaded yet", while a ``None`` value means "not found".
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, Optional

from pydantic import ValidationError

from .cache import AsyncMemo
from .constants import ORG_PREFIX, UNKNOWN_TEAM
from .errors import SourceError
from .models import RawTeam

logger = logging.getLogger(__name__)

TeamMap = Dict[int, Optional[RawTeam]]


def display_name(team: Optional[RawTeam], org_prefix: str = ORG_PREFIX) -> str:
    if team is None:
        return UNKNOWN_TEAM
    attrs = team.attributes
    name = attrs.name or attrs.short_name or f"Team {team.id}"
    if org_prefix and name.startswith(org_prefix):
        name = name[len(org_prefix):]
    return name


class TeamResolver:
    def __init__(self, source) -> None:
        self._source = source
        self._memo: AsyncMemo[int, Optional[RawTeam]] = AsyncMemo(self._fetch)

    def __contains__(self, team_id: int) -> bool:
        return team_id in self._memo

    async def _fetch(self, team_id: int) -> Optional[RawTeam]:
        try:
            payload = await self._source.read_team(team_id)
        except SourceError as e:
            logger.warning("Error loading team %s: %s", team_id, e.cause)
            return None
        if payload is None:
            logger.debug("Team %s not found", team_id)
            return None
        try:
            return RawTeam.model_validate(payload)
        except ValidationError as e:
            logger.warning("Malformed team %s: %s", team_id, e)
            return None

    async def resolve(self, team_id: int) -> Optional[RawTeam]:
        return await self._memo.get(team_id)

    async def resolve_many(self, team_ids: Iterable[int]) -> TeamMap:
        ids = list(dict.fromkeys(team_ids))
        teams = await asyncio.gather(*(self.resolve(i) for i in ids))
        return dict(zip(ids, teams))
