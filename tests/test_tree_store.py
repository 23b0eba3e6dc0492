import pytest

pytest.importorskip("pydantic_settings")

from fastapi import HTTPException
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker

import heirloom.routers.imports_router as imports_router
from heirloom.config import get_settings
from heirloom.db import Base
from heirloom.models import FamilyTreeRecord, ProfileRecord
from heirloom.routers.imports_router import decode_upload, get_tree, run_import, tree_profiles
from heirloom.routers.profiles_router import attach_event_media, get_profile, profile_timeline
from heirloom.schemas import MediaAttachRequest, MediaUploadItem
from heirloom.services.gedcom_import.pipeline import import_gedcom
from heirloom.services.media import MediaTargetNotFound, MediaUpload, attach_media
from heirloom.services.tree_store import load_profile, load_tree, load_tree_profiles, store_import

SAMPLE = """0 @I1@ INDI
1 NAME Jane /Doe/
1 SEX F
1 DEAT
2 DATE 12 MAR 1990
1 RESI
1 BIRT
2 DATE 1 JAN 1930
2 PLAC Springfield
1 FAMC @F1@
0 @I2@ INDI
1 NAME John /Doe/
1 SEX M
1 FAMS @F1@
0 @I3@ INDI
1 NAME Mary /Smith/
1 SEX F
1 FAMS @F1@
0 @F1@ FAM
1 HUSB @I2@
1 WIFE @I3@
1 CHIL @I1@
1 MARR
2 DATE 31 FEB 1925
"""


@pytest.fixture
def db_session() -> Session:
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def upload_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    get_settings.cache_clear()
    yield tmp_path / "uploads"
    get_settings.cache_clear()


def test_store_and_load_round_trip_keeps_relations(db_session: Session):
    result = import_gedcom(SAMPLE, "user-1", 2)
    store_import(db_session, result)
    db_session.commit()

    tree = load_tree(db_session, result.tree.id)
    assert tree is not None
    assert tree.home_person_id == result.tree.home_person_id
    assert tree.member_ids == result.tree.member_ids

    imported = {profile.id: profile for profile in result.profiles}
    loaded = load_tree_profiles(db_session, result.tree.id)
    assert len(loaded) == 3
    for profile in loaded:
        assert profile == imported[profile.id]


def test_load_missing_rows_returns_none(db_session: Session):
    assert load_tree(db_session, "tree-missing") is None
    assert load_profile(db_session, "imp-missing") is None


def test_run_import_persists_and_archives(db_session: Session, upload_dir):
    summary = run_import(db_session, filename="family.ged", content=SAMPLE, user_id="user-1", max_generations=1)
    assert summary.profile_count == 3
    assert summary.event_count == 3 + 1 + 1
    assert (upload_dir / f"{summary.tree_id}.ged").read_text(encoding="utf-8") == SAMPLE

    tree = get_tree(summary.tree_id, db=db_session)
    assert tree.home_person_id == summary.home_person_id
    names = sorted(profile.name for profile in tree_profiles(summary.tree_id, db=db_session))
    assert names == ["Jane Doe", "John Doe", "Mary Smith"]


def test_run_import_negative_window_stores_empty_tree(db_session: Session, upload_dir):
    summary = run_import(db_session, filename="family.ged", content=SAMPLE, user_id="user-1", max_generations=-2)
    assert summary.profile_count == 0
    assert summary.home_person_id is None
    tree = get_tree(summary.tree_id, db=db_session)
    assert tree.member_ids == []
    assert tree_profiles(summary.tree_id, db=db_session) == []


def test_run_import_archive_failure_persists_nothing(db_session: Session, upload_dir, monkeypatch):
    def fail_archive(tree_id: str, content: str):
        raise OSError("disk full")

    monkeypatch.setattr(imports_router, "_archive_upload", fail_archive)
    with pytest.raises(HTTPException) as exc_info:
        run_import(db_session, filename="family.ged", content=SAMPLE, user_id="user-1", max_generations=1)
    assert exc_info.value.status_code == 500
    assert db_session.scalar(select(func.count()).select_from(FamilyTreeRecord)) == 0
    assert db_session.scalar(select(func.count()).select_from(ProfileRecord)) == 0


def test_unknown_tree_and_profile_are_404(db_session: Session):
    with pytest.raises(HTTPException) as exc_info:
        get_tree("tree-0", db=db_session)
    assert exc_info.value.status_code == 404
    with pytest.raises(HTTPException) as exc_info:
        get_profile("imp-0", db=db_session)
    assert exc_info.value.status_code == 404


def test_timeline_is_sorted_and_formatted(db_session: Session, upload_dir):
    summary = run_import(db_session, filename="family.ged", content=SAMPLE, user_id="user-1")
    timeline = profile_timeline(summary.home_person_id, db=db_session)
    assert [entry.type for entry in timeline] == ["Birth", "Death", "Residence"]
    assert timeline[0].display_date == "January 1, 1930"
    assert timeline[0].sentence == "Jane Doe was born in 1930."
    assert timeline[2].display_date == "Date unknown"

    john = next(profile for profile in tree_profiles(summary.tree_id, db=db_session) if profile.name == "John Doe")
    marriage = profile_timeline(john.id, db=db_session)[0]
    assert marriage.display_date == "31 FEB 1925"
    assert marriage.sentence == "John Doe married Mary Smith in 1925."


def test_attach_media_appends_to_event(db_session: Session):
    result = import_gedcom(SAMPLE, "user-1", 1)
    store_import(db_session, result)
    db_session.commit()
    jane = next(profile for profile in result.profiles if profile.name == "Jane Doe")
    birth = next(event for event in jane.timeline if event.type == "Birth")

    body = MediaAttachRequest(
        items=[
            MediaUploadItem(name="certificate.pdf", url="data:application/pdf;base64,AA=="),
            MediaUploadItem(name="portrait", url="data:image/png;base64,AA==", mime_type="image/png"),
        ]
    )
    event = attach_event_media(jane.id, birth.id, body, db=db_session)
    assert [item.kind for item in event.media] == ["document", "photo"]

    attach_media(db_session, jane.id, birth.id, [MediaUpload(name="clip.mp4", url="file:///clip.mp4")])
    db_session.commit()
    stored = load_profile(db_session, jane.id)
    stored_birth = next(item for item in stored.timeline if item.id == birth.id)
    assert [item.name for item in stored_birth.media] == ["certificate.pdf", "portrait", "clip.mp4"]
    assert len({item.id for item in stored_birth.media}) == 3


def test_attach_media_unknown_event(db_session: Session):
    result = import_gedcom(SAMPLE, "user-1", 1)
    store_import(db_session, result)
    db_session.commit()
    with pytest.raises(MediaTargetNotFound):
        attach_media(db_session, result.profiles[0].id, "ev-missing", [])
    with pytest.raises(HTTPException) as exc_info:
        attach_event_media(result.profiles[0].id, "ev-missing", MediaAttachRequest(), db=db_session)
    assert exc_info.value.status_code == 404


def test_decode_upload_falls_back_to_latin1():
    assert decode_upload("0 HEAD\n".encode("utf-8")) == "0 HEAD\n"
    assert decode_upload("1 NAME Jos\xe9".encode("latin-1")) == "1 NAME Jos\xe9"


def test_latin1_upload_keeps_c1_bytes_inside_values():
    raw = b"0 @I1@ INDI\n1 NAME Ann /Doe/\n1 RESI\n2 PLAC St. John\x85s Wood, London\n"
    result = import_gedcom(decode_upload(raw), "user-1", 0)
    assert result.profiles[0].timeline[0].place == "St. John\x85s Wood, London"
