import pytest

pytest.importorskip("pydantic_settings")

from heirloom.config import get_settings
from heirloom.services.startup_checks import run_startup_preflight


def test_startup_preflight_ok_in_writable_workspace(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./tmp/heirloom.db")
    monkeypatch.setenv("UPLOAD_DIR", "data/uploads")
    get_settings.cache_clear()

    result = run_startup_preflight()

    assert result.ok is True
    assert result.errors == []
    assert (tmp_path / "data" / "uploads").is_dir()

    get_settings.cache_clear()


def test_startup_preflight_warns_on_negative_generation_window(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DEFAULT_MAX_GENERATIONS", "-1")
    get_settings.cache_clear()

    result = run_startup_preflight()

    assert result.ok is True
    assert any("DEFAULT_MAX_GENERATIONS" in warning for warning in result.warnings)

    get_settings.cache_clear()
