from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4


def new_import_stamp(now: datetime | None = None) -> str:
    moment = now or datetime.now(UTC)
    return str(int(moment.timestamp() * 1000))


def bare_xref(value: str) -> str:
    return value.replace("@", "").strip()


def new_event_id(stamp: str) -> str:
    return f"ev-{stamp}-{uuid4().hex[:9]}"


def new_family_event_id(stamp: str) -> str:
    return f"ev-fam-{stamp}-{uuid4().hex[:5]}"


def new_media_id() -> str:
    return f"m-{uuid4().hex[:12]}"


def profile_id_for(stamp: str, xref: str) -> str:
    return f"imp-{stamp}-{bare_xref(xref)}"


def tree_id_for(stamp: str) -> str:
    return f"tree-{stamp}"
