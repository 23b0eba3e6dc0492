from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from heirloom.config import get_settings
from heirloom.db import get_db
from heirloom.schemas import FamilyTreeView, ImportSummary, ProfileView
from heirloom.services.gedcom_import.pipeline import import_gedcom
from heirloom.services.tree_store import load_tree, load_tree_profiles, store_import

router = APIRouter(prefix="/api", tags=["imports"])


def _archive_upload(tree_id: str, content: str) -> Path:
    upload_dir = Path(get_settings().upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    file_path = upload_dir / f"{tree_id}.ged"
    file_path.write_text(content, encoding="utf-8")
    return file_path


def decode_upload(content_bytes: bytes) -> str:
    try:
        return content_bytes.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content_bytes.decode("latin-1")


def run_import(
    db: Session,
    *,
    filename: str,
    content: str,
    user_id: str,
    max_generations: int | None = None,
    home_xref: str | None = None,
) -> ImportSummary:
    result = import_gedcom(content, user_id, max_generations, home_xref=home_xref)
    store_import(db, result)
    try:
        _archive_upload(result.tree.id, content)
    except OSError as exc:
        db.rollback()
        raise HTTPException(status_code=500, detail="Could not archive the uploaded file") from exc
    db.commit()
    return ImportSummary(
        tree_id=result.tree.id,
        filename=filename,
        home_person_id=result.tree.home_person_id,
        profile_count=len(result.profiles),
        event_count=sum(len(profile.timeline) for profile in result.profiles),
    )


@router.post("/imports", response_model=ImportSummary)
async def upload_gedcom(
    user_id: str,
    max_generations: int | None = Query(default=None, ge=0),
    home_xref: str | None = None,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
) -> ImportSummary:
    if not file.filename or not file.filename.lower().endswith((".ged", ".gedcom", ".txt")):
        raise HTTPException(status_code=400, detail="Expected a GEDCOM file")
    content = decode_upload(await file.read())
    return run_import(
        db,
        filename=file.filename,
        content=content,
        user_id=user_id,
        max_generations=max_generations,
        home_xref=home_xref,
    )


@router.get("/trees/{tree_id}", response_model=FamilyTreeView)
def get_tree(tree_id: str, db: Session = Depends(get_db)) -> FamilyTreeView:
    tree = load_tree(db, tree_id)
    if not tree:
        raise HTTPException(status_code=404, detail="Tree not found")
    return FamilyTreeView.model_validate(tree, from_attributes=True)


@router.get("/trees/{tree_id}/profiles", response_model=list[ProfileView])
def tree_profiles(tree_id: str, db: Session = Depends(get_db)) -> list[ProfileView]:
    if not load_tree(db, tree_id):
        raise HTTPException(status_code=404, detail="Tree not found")
    return [
        ProfileView.model_validate(profile, from_attributes=True)
        for profile in load_tree_profiles(db, tree_id)
    ]
