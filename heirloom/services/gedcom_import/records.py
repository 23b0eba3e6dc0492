from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

Gender = Literal["male", "female", "unknown"]

UNKNOWN_NAME = "Unknown"
MARRIAGE = "Marriage"
BIRTH = "Birth"
DEATH = "Death"

EVENT_LABELS: dict[str, str] = {
    "BIRT": BIRTH,
    "DEAT": DEATH,
    "BURI": "Burial",
    "RESI": "Residence",
    "EMIG": "Departure/Emigration",
    "IMMI": "Arrival/Immigration",
    "CENS": "Census",
    "MARR": MARRIAGE,
    "GRAD": "Graduation",
    "BARM": "Bar Mitzvah",
    "BATM": "Bat Mitzvah",
    "CONF": "Confirmation",
    "EVEN": "Event",
}


@dataclass
class MediaItem:
    id: str
    name: str
    kind: str
    url: str
    created_at: str


@dataclass
class LifeEvent:
    id: str
    type: str
    date: str = ""
    place: str = ""
    media: list[MediaItem] = field(default_factory=list)
    spouse_name: str | None = None


@dataclass
class IndividualRecord:
    xref: str
    name: str = UNKNOWN_NAME
    gender: Gender = "unknown"
    timeline: list[LifeEvent] = field(default_factory=list)
    child_of_family: str | None = None
    spouse_families: list[str] = field(default_factory=list)
    birth_year: str = UNKNOWN_NAME
    death_year: str | None = None


@dataclass
class FamilyRecord:
    xref: str
    husband: str | None = None
    wife: str | None = None
    children: list[str] = field(default_factory=list)
    marriage_date: str = ""
    marriage_place: str = ""


@dataclass
class Profile:
    id: str
    user_id: str
    name: str
    gender: Gender
    birth_year: str
    death_year: str | None
    image_url: str
    summary: str
    is_memorial: bool
    timeline: list[LifeEvent] = field(default_factory=list)
    memories: list[MediaItem] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    parent_ids: list[str] = field(default_factory=list)
    spouse_ids: list[str] = field(default_factory=list)
    child_ids: list[str] = field(default_factory=list)


@dataclass
class FamilyTree:
    id: str
    user_id: str
    name: str
    created_at: datetime
    home_person_id: str | None
    member_ids: list[str] = field(default_factory=list)


@dataclass
class ImportResult:
    profiles: list[Profile]
    tree: FamilyTree
