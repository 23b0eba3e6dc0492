from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from heirloom.models import LifeEventRecord
from heirloom.services.formatters import infer_media_kind
from heirloom.services.gedcom_import.records import LifeEvent, MediaItem
from heirloom.services.identifiers import new_media_id
from heirloom.services.tree_store import dump_media, event_from_row, load_media


class MediaTargetNotFound(LookupError):
    pass


@dataclass
class MediaUpload:
    name: str
    url: str
    mime_type: str | None = None


def attach_media(
    db: Session,
    profile_id: str,
    event_id: str,
    uploads: list[MediaUpload],
    now: datetime | None = None,
) -> LifeEvent:
    """Append uploaded media to one timeline event. The caller commits."""
    stmt: Select[tuple[LifeEventRecord]] = select(LifeEventRecord).where(
        LifeEventRecord.id == event_id,
        LifeEventRecord.profile_id == profile_id,
    )
    row = db.scalars(stmt).first()
    if row is None:
        raise MediaTargetNotFound(f"Event {event_id} not found on profile {profile_id}")

    created_at = (now or datetime.now(UTC)).isoformat()
    media = load_media(row.media_json)
    for upload in uploads:
        media.append(
            MediaItem(
                id=new_media_id(),
                name=upload.name,
                kind=infer_media_kind(upload.name, upload.mime_type),
                url=upload.url,
                created_at=created_at,
            )
        )
    row.media_json = dump_media(media)
    db.flush()
    return event_from_row(row)
