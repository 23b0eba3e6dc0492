from __future__ import annotations

from heirloom.config import get_settings

KNOWN_GENDERS = {"male", "female", "unknown"}


def placeholder_portrait(gender: str, base: str | None = None) -> str:
    prefix = (base if base is not None else get_settings().placeholder_portrait_base).rstrip("/")
    key = gender if gender in KNOWN_GENDERS else "unknown"
    return f"{prefix}/{key}.svg"
