"""Event categories used for filtering and registration links.

Categories are decided by an ordered rule table evaluated top to bottom. The
first matching rule wins, so the order of ``DEFAULT_RULES`` matters: a game
with a visiting team is an adult league game even when the home team is
called "Bears U12".
"""
from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from .constants import FACILITY_ID, REGISTRATION_BASE_URL
from .models import Category, CategoryRule, NormalizedEvent, RawEvent, RawTeam


DEFAULT_CATEGORIES: list[Category] = [
    Category(id="adult-league-game", name="Adult League Games", color="#3b82f6", can_register=False),
    Category(id="bears", name="Bears (Youth Hockey)", color="#ef4444", can_register=False),
    Category(id="private-hockey-lessons", name="Private Hockey Lessons", color="#14b8a6"),
    Category(id="gretzky-hour", name="Gretzky Hour", color="#f59e0b", sports_id=32),
    Category(id="public-skate", name="Public Skate", color="#10b981", sports_id=31),
    Category(id="drop-in", name="Drop-In Sessions", color="#8b5cf6", sports_id=20),
    Category(id="figure-skating", name="Figure Skating", color="#ec4899", sports_id=27),
    # Last entry doubles as the fallback.
    Category(id="other", name="Other", color="#6b7280"),
]

DEFAULT_RULES: list[CategoryRule] = [
    CategoryRule(category="adult-league-game", event_type_id="g", requires_visitor=True),
    CategoryRule(category="bears", markers=["Bears"], forbids_visitor=True),
    CategoryRule(category="private-hockey-lessons", markers=["Private Lesson"]),
    CategoryRule(category="gretzky-hour", markers=["Gretzky Hour"]),
    CategoryRule(category="public-skate", markers=["Public Skate"]),
    CategoryRule(category="drop-in", markers=["Drop-In", "Drop In"]),
    CategoryRule(category="figure-skating", markers=["Freestyle", "Figure Skating"]),
]

OTHER = "other"


def _rule_matches(rule: CategoryRule, event: RawEvent, home_name: str) -> bool:
    attrs = event.attributes
    has_visitor = bool(attrs.vteam_id)
    if rule.event_type_id is not None and attrs.event_type_id != rule.event_type_id:
        return False
    if rule.requires_visitor and not has_visitor:
        return False
    if rule.forbids_visitor and has_visitor:
        return False
    if rule.markers and not any(m in home_name for m in rule.markers):
        return False
    return True


def classify(
    event: RawEvent,
    home_team: Optional[RawTeam],
    rules: Sequence[CategoryRule] = DEFAULT_RULES,
) -> str:
    """Return the category id for *event*; never raises."""
    home_name = home_team.attributes.name if home_team is not None else ""
    if not home_name:
        return OTHER
    for rule in rules:
        if _rule_matches(rule, event, home_name):
            return rule.category
    return OTHER


def get_category(category_id: str, categories: Sequence[Category] = DEFAULT_CATEGORIES) -> Category:
    for c in categories:
        if c.id == category_id:
            return c
    return categories[-1]


def registration_url(
    event: NormalizedEvent,
    categories: Sequence[Category] = DEFAULT_CATEGORIES,
    base_url: str = REGISTRATION_BASE_URL,
    facility_id: int = FACILITY_ID,
) -> Optional[str]:
    cfg = get_category(event.category, categories)
    if not cfg.can_register:
        return None
    if cfg.sports_id:
        day: date = event.start.date()
        return (
            f"{base_url}/event-registration?date={day.isoformat()}"
            f"&facility_ids={facility_id}&sport_ids={cfg.sports_id}"
        )
    if event.home_team_id:
        return f"{base_url}/group/register/{event.home_team_id}"
    return None
