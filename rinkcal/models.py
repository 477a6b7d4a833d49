from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from dateutil import parser as dtparser
from pydantic import BaseModel, Field, field_validator

EventType = Literal["game", "session", "lesson", "other"]


class EventAttributes(BaseModel):
    resource_id: int
    event_type_id: str  # "g" game, "k" session, "L" lesson, "b" facility block
    start: str  # local time, no offset
    end: str
    hteam_id: Optional[int] = None
    vteam_id: Optional[int] = None
    publish: bool = True
    best_description: Optional[str] = None

    @field_validator("hteam_id", "vteam_id")
    @classmethod
    def _zero_is_absent(cls, v: Optional[int]) -> Optional[int]:
        return v or None

    @field_validator("start", "end")
    @classmethod
    def _parseable_time(cls, v: str) -> str:
        # must parse as a local timestamp
        dtparser.isoparse(v)
        return v


class RawEvent(BaseModel):
    id: str
    type: str = "events"
    attributes: EventAttributes

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v)


class TeamAttributes(BaseModel):
    name: str = ""
    short_name: Optional[str] = None


class RawTeam(BaseModel):
    id: str
    type: str = "teams"
    attributes: TeamAttributes = Field(default_factory=TeamAttributes)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v)


class Category(BaseModel):
    id: str
    name: str
    color: str
    can_register: bool = True
    sports_id: Optional[int] = None


class CategoryRule(BaseModel):
    """One row of the classifier table.

    A rule matches when every condition it sets holds. ``markers`` are
    case-sensitive substrings of the home-team name; an empty tuple means the
    name is not consulted.
    """

    category: str
    markers: List[str] = Field(default_factory=list)
    event_type_id: Optional[str] = None
    requires_visitor: bool = False
    forbids_visitor: bool = False


class NormalizedEvent(BaseModel):
    id: str
    title: str
    start: datetime
    end: datetime
    resource_id: int
    resource_name: str
    event_type: EventType = "other"
    home_team_id: Optional[int] = None
    visiting_team_id: Optional[int] = None
    description: Optional[str] = None
    category: str = "other"
    is_published: bool = True
    variants: List["NormalizedEvent"] = Field(default_factory=list)
    is_deduplicated: bool = False
    # Kept for consumers that need attributes we do not surface.
    raw: Optional[RawEvent] = Field(default=None, exclude=True)


NormalizedEvent.model_rebuild()
