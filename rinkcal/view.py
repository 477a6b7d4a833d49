from __future__ import annotations

from typing import Iterable, List, Optional, Set

from pydantic import BaseModel, Field

from .constants import VISIBLE_RINK_IDS
from .models import NormalizedEvent


class ViewFilter(BaseModel):
    """What the calendar currently shows. ``categories=None`` shows all."""

    rinks: Set[int] = Field(default_factory=lambda: set(VISIBLE_RINK_IDS))
    show_unpublished: bool = False
    categories: Optional[Set[str]] = None


def _published(event: NormalizedEvent) -> bool:
    if event.is_deduplicated and event.variants:
        return event.variants[0].is_published
    return event.is_published


def apply_view_filter(events: Iterable[NormalizedEvent], view: ViewFilter) -> List[NormalizedEvent]:
    out: List[NormalizedEvent] = []
    for e in events:
        if e.resource_id not in view.rinks:
            continue
        if not view.show_unpublished and not _published(e):
            continue
        if view.categories is not None and e.category not in view.categories:
            continue
        out.append(e)
    return out
