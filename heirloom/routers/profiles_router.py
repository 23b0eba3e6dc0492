from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from heirloom.db import get_db
from heirloom.schemas import LifeEventView, MediaAttachRequest, ProfileView, TimelineEntryView
from heirloom.services.dates import format_full_date, parse_gedcom_date
from heirloom.services.formatters import format_event_sentence
from heirloom.services.media import MediaTargetNotFound, MediaUpload, attach_media
from heirloom.services.tree_store import load_profile

router = APIRouter(prefix="/api/profiles", tags=["profiles"])

DATE_UNKNOWN_LABEL = "Date unknown"


@router.get("/{profile_id}", response_model=ProfileView)
def get_profile(profile_id: str, db: Session = Depends(get_db)) -> ProfileView:
    profile = load_profile(db, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return ProfileView.model_validate(profile, from_attributes=True)


@router.get("/{profile_id}/timeline", response_model=list[TimelineEntryView])
def profile_timeline(profile_id: str, db: Session = Depends(get_db)) -> list[TimelineEntryView]:
    profile = load_profile(db, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    ordered = sorted(profile.timeline, key=lambda event: parse_gedcom_date(event.date))
    return [
        TimelineEntryView(
            **LifeEventView.model_validate(event, from_attributes=True).model_dump(),
            display_date=format_full_date(event.date) if event.date else DATE_UNKNOWN_LABEL,
            sentence=format_event_sentence(event, profile.name),
        )
        for event in ordered
    ]


@router.post("/{profile_id}/events/{event_id}/media", response_model=LifeEventView)
def attach_event_media(
    profile_id: str,
    event_id: str,
    body: MediaAttachRequest,
    db: Session = Depends(get_db),
) -> LifeEventView:
    uploads = [MediaUpload(name=item.name, url=item.url, mime_type=item.mime_type) for item in body.items]
    try:
        event = attach_media(db, profile_id, event_id, uploads)
    except MediaTargetNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    db.commit()
    return LifeEventView.model_validate(event, from_attributes=True)
