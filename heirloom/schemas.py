from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MediaItemView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    kind: str
    url: str
    created_at: str


class LifeEventView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    date: str = ""
    place: str = ""
    spouse_name: str | None = None
    media: list[MediaItemView] = Field(default_factory=list)


class TimelineEntryView(LifeEventView):
    display_date: str
    sentence: str


class ProfileView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    gender: str
    birth_year: str
    death_year: str | None = None
    image_url: str
    summary: str
    is_memorial: bool
    timeline: list[LifeEventView] = Field(default_factory=list)
    memories: list[MediaItemView] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    parent_ids: list[str] = Field(default_factory=list)
    spouse_ids: list[str] = Field(default_factory=list)
    child_ids: list[str] = Field(default_factory=list)


class FamilyTreeView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    created_at: datetime
    home_person_id: str | None = None
    member_ids: list[str] = Field(default_factory=list)


class ImportSummary(BaseModel):
    tree_id: str
    filename: str
    home_person_id: str | None = None
    profile_count: int
    event_count: int


class MediaUploadItem(BaseModel):
    name: str
    url: str
    mime_type: str | None = None


class MediaAttachRequest(BaseModel):
    items: list[MediaUploadItem] = Field(default_factory=list)
