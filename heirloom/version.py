from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "heirloom"
FALLBACK_VERSION = "0.1.0"


@lru_cache
def get_app_version() -> str:
    """Installed distribution version, or the source-tree fallback when running uninstalled."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return FALLBACK_VERSION
