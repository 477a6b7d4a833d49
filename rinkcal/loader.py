"""Range loading for the day/week/month calendar views.

``RangeLoader.load`` fetches every date file in the requested window
concurrently, filters to the bookable rinks, resolves the referenced teams in
one batch, then normalises and deduplicates. Date files and teams are
memoized for the lifetime of the loader, and the neighbouring window is
warmed in the background after each load.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, List, Optional, Set

from pydantic import ValidationError

from .cache import AsyncMemo
from .config import Settings
from .errors import RangeLoadError, SourceError
from .merge import deduplicate
from .models import NormalizedEvent, RawEvent
from .normalise import normalize_all
from .teams import TeamResolver
from .utils import days_from, iso_day, month_days, week_start

logger = logging.getLogger(__name__)


class Granularity(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


def date_range(focal: date, granularity: Granularity) -> List[date]:
    granularity = Granularity(granularity)
    if granularity is Granularity.DAY:
        return [focal]
    if granularity is Granularity.WEEK:
        return days_from(week_start(focal), 7)
    return month_days(focal)


def adjacent_dates(focal: date, granularity: Granularity) -> List[date]:
    """Dates worth warming around *focal*; month views prefetch nothing."""
    granularity = Granularity(granularity)
    if granularity is Granularity.DAY:
        return [focal - timedelta(days=1), focal + timedelta(days=1)]
    if granularity is Granularity.WEEK:
        sunday = week_start(focal)
        return days_from(sunday - timedelta(days=7), 7) + days_from(sunday + timedelta(days=7), 7)
    return []


def boundary_filter(events: Iterable[RawEvent], settings: Settings) -> List[RawEvent]:
    visible = set(settings.visible_rink_ids)
    excluded = set(settings.excluded_team_ids)
    out: List[RawEvent] = []
    for e in events:
        a = e.attributes
        if a.resource_id not in visible:
            continue
        if a.event_type_id == settings.block_event_type:
            continue
        if not a.hteam_id or a.hteam_id in excluded:
            continue
        out.append(e)
    return out


def referenced_team_ids(events: Iterable[RawEvent]) -> Set[int]:
    ids: Set[int] = set()
    for e in events:
        if e.attributes.hteam_id:
            ids.add(e.attributes.hteam_id)
        if e.attributes.vteam_id:
            ids.add(e.attributes.vteam_id)
    return ids


class RangeLoader:
    def __init__(
        self,
        source,
        settings: Settings | None = None,
        teams: TeamResolver | None = None,
        prefetch: bool = True,
    ) -> None:
        self.source = source
        self.settings = settings or Settings()
        self.teams = teams or TeamResolver(source)
        self.prefetch_enabled = prefetch
        self.last_error: Optional[BaseException] = None
        self._in_flight = 0
        self._days: AsyncMemo[date, List[RawEvent]] = AsyncMemo(self._fetch_day)
        self._background: Set[asyncio.Task] = set()

    @property
    def loading(self) -> bool:
        """True while any load call is still running."""
        return self._in_flight > 0

    def is_cached(self, day: date) -> bool:
        return day in self._days

    async def _fetch_day(self, day: date) -> List[RawEvent]:
        key = iso_day(day)
        try:
            payload = await self.source.read_events(day)
        except SourceError as e:
            logger.warning("No data available for %s: %s", key, e.cause)
            return []
        if payload is None:
            logger.debug("No event file for %s", key)
            return []
        events: List[RawEvent] = []
        for item in payload:
            try:
                events.append(RawEvent.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping malformed event in %s: %s", key, e)
        return events

    async def events_for(self, day: date) -> List[RawEvent]:
        return await self._days.get(day)

    async def _compose(self, focal: date, granularity: Granularity) -> List[NormalizedEvent]:
        days = date_range(focal, granularity)
        per_day = await asyncio.gather(*(self.events_for(d) for d in days))
        raw = [e for events in per_day for e in events]

        filtered = boundary_filter(raw, self.settings)
        teams = await self.teams.resolve_many(referenced_team_ids(filtered))

        s = self.settings
        normalized = normalize_all(
            filtered,
            teams,
            rink_names=s.rinks,
            rules=s.category_rules,
            org_prefix=s.org_prefix,
        )
        result = deduplicate(normalized, teams, org_prefix=s.org_prefix)
        logger.info(
            "Loaded %d events (%d raw) for %s %s",
            len(result),
            len(raw),
            granularity.value,
            iso_day(focal),
        )
        return result

    async def load(self, focal: date, granularity: Granularity = Granularity.DAY) -> List[NormalizedEvent]:
        granularity = Granularity(granularity)
        self._in_flight += 1
        try:
            result = await self._compose(focal, granularity)
        except Exception as e:
            self.last_error = e
            raise RangeLoadError(f"failed to load {granularity.value} of {iso_day(focal)}") from e
        finally:
            self._in_flight -= 1

        if self.prefetch_enabled:
            self.prefetch(focal, granularity)
        return result

    def prefetch(self, focal: date, granularity: Granularity) -> Optional[asyncio.Task]:
        dates = [d for d in adjacent_dates(focal, granularity) if not self.is_cached(d)]
        if not dates:
            return None
        task = asyncio.create_task(self._warm(dates))
        self._background.add(task)
        task.add_done_callback(self._prefetch_done)
        return task

    async def _warm(self, dates: List[date]) -> None:
        results = await asyncio.gather(*(self.events_for(d) for d in dates), return_exceptions=True)
        for d, r in zip(dates, results):
            if isinstance(r, BaseException):
                logger.warning("Prefetch of %s failed: %s", iso_day(d), r)

    def _prefetch_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Prefetch failed: %s", exc)

    async def drain(self) -> None:
        """Wait for outstanding background prefetches."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def aclose(self) -> None:
        for task in list(self._background):
            task.cancel()
        await self.drain()
