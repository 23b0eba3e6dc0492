from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from heirloom.config import get_settings


@dataclass
class StartupCheckResult:
    ok: bool
    errors: list[str]
    warnings: list[str]


def _is_writable_path(path: Path) -> bool:
    if path.exists():
        return os.access(path, os.W_OK)
    try:
        path.mkdir(parents=True, exist_ok=True)
        test_file = path / ".write_test"
        test_file.write_text("ok", encoding="utf-8")
        test_file.unlink(missing_ok=True)
        return True
    except OSError:
        return False


def run_startup_preflight() -> StartupCheckResult:
    settings = get_settings()
    errors: list[str] = []
    warnings: list[str] = []

    uploads_dir = Path(settings.upload_dir)
    if not _is_writable_path(uploads_dir):
        errors.append(f"Uploads directory is not writable: {uploads_dir.resolve()}")

    db_url = settings.database_url
    if db_url.startswith("sqlite:///"):
        sqlite_path = db_url.replace("sqlite:///", "", 1)
        db_parent = Path(sqlite_path).expanduser().parent
        if not _is_writable_path(db_parent):
            errors.append(f"Database directory is not writable: {db_parent.resolve()}")
    else:
        warnings.append("Non-sqlite database configured; startup write checks skipped.")

    if settings.default_max_generations < 0:
        warnings.append("DEFAULT_MAX_GENERATIONS is negative; imports will keep no profiles.")
    elif settings.default_max_generations == 0:
        warnings.append("DEFAULT_MAX_GENERATIONS is 0; imports will keep only the home individual's generation.")

    if not settings.placeholder_portrait_base:
        warnings.append("PLACEHOLDER_PORTRAIT_BASE is blank; portraits will use relative paths.")

    return StartupCheckResult(ok=not errors, errors=errors, warnings=warnings)
