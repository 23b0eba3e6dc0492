from __future__ import annotations

import json
from dataclasses import asdict

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from heirloom.models import FamilyTreeRecord, LifeEventRecord, ProfileRecord
from heirloom.services.gedcom_import.records import FamilyTree, ImportResult, LifeEvent, MediaItem, Profile


def _load_list(raw: str) -> list:
    try:
        payload = json.loads(raw or "[]")
    except json.JSONDecodeError:
        return []
    return payload if isinstance(payload, list) else []


def dump_media(items: list[MediaItem]) -> str:
    return json.dumps([asdict(item) for item in items])


def load_media(raw: str) -> list[MediaItem]:
    items: list[MediaItem] = []
    for entry in _load_list(raw):
        if not isinstance(entry, dict):
            continue
        try:
            items.append(MediaItem(**entry))
        except TypeError:
            continue
    return items


def _event_row(event: LifeEvent, position: int) -> LifeEventRecord:
    return LifeEventRecord(
        id=event.id,
        position=position,
        type=event.type,
        date=event.date,
        place=event.place,
        spouse_name=event.spouse_name,
        media_json=dump_media(event.media),
    )


def _profile_row(profile: Profile, tree_id: str) -> ProfileRecord:
    return ProfileRecord(
        id=profile.id,
        tree_id=tree_id,
        user_id=profile.user_id,
        name=profile.name,
        gender=profile.gender,
        birth_year=profile.birth_year,
        death_year=profile.death_year,
        image_url=profile.image_url,
        summary=profile.summary,
        is_memorial=profile.is_memorial,
        memories_json=dump_media(profile.memories),
        sources_json=json.dumps(profile.sources),
        parent_ids_json=json.dumps(profile.parent_ids),
        spouse_ids_json=json.dumps(profile.spouse_ids),
        child_ids_json=json.dumps(profile.child_ids),
        events=[_event_row(event, index) for index, event in enumerate(profile.timeline)],
    )


def store_import(db: Session, result: ImportResult) -> FamilyTreeRecord:
    """Add one import batch to the session. The caller commits."""
    tree = result.tree
    tree_row = FamilyTreeRecord(
        id=tree.id,
        user_id=tree.user_id,
        name=tree.name,
        created_at=tree.created_at,
        home_person_id=tree.home_person_id,
        member_ids_json=json.dumps(tree.member_ids),
    )
    tree_row.profiles = [_profile_row(profile, tree.id) for profile in result.profiles]
    db.add(tree_row)
    db.flush()
    return tree_row


def event_from_row(row: LifeEventRecord) -> LifeEvent:
    return LifeEvent(
        id=row.id,
        type=row.type,
        date=row.date,
        place=row.place,
        media=load_media(row.media_json),
        spouse_name=row.spouse_name,
    )


def profile_from_row(row: ProfileRecord) -> Profile:
    return Profile(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        gender=row.gender,  # type: ignore[arg-type]
        birth_year=row.birth_year,
        death_year=row.death_year,
        image_url=row.image_url,
        summary=row.summary,
        is_memorial=row.is_memorial,
        timeline=[event_from_row(event) for event in row.events],
        memories=load_media(row.memories_json),
        sources=[str(item) for item in _load_list(row.sources_json)],
        parent_ids=[str(item) for item in _load_list(row.parent_ids_json)],
        spouse_ids=[str(item) for item in _load_list(row.spouse_ids_json)],
        child_ids=[str(item) for item in _load_list(row.child_ids_json)],
    )


def tree_from_row(row: FamilyTreeRecord) -> FamilyTree:
    return FamilyTree(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        created_at=row.created_at,
        home_person_id=row.home_person_id,
        member_ids=[str(item) for item in _load_list(row.member_ids_json)],
    )


def load_profile(db: Session, profile_id: str) -> Profile | None:
    row = db.get(ProfileRecord, profile_id)
    return profile_from_row(row) if row else None


def load_tree(db: Session, tree_id: str) -> FamilyTree | None:
    row = db.get(FamilyTreeRecord, tree_id)
    return tree_from_row(row) if row else None


def load_tree_profiles(db: Session, tree_id: str) -> list[Profile]:
    stmt: Select[tuple[ProfileRecord]] = (
        select(ProfileRecord).where(ProfileRecord.tree_id == tree_id).order_by(ProfileRecord.name, ProfileRecord.id)
    )
    return [profile_from_row(row) for row in db.scalars(stmt).all()]
