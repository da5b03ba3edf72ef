import logging
from pathlib import Path

from mrrfantasy.config import load_settings


def test_defaults(monkeypatch):
    for name in ("MRRFANTASY_DB_PATH", "MRRFANTASY_LOG_LEVEL", "MRRFANTASY_HOST", "MRRFANTASY_PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.db_path == Path("mrrfantasy.sqlite")
    assert settings.log_level == "INFO"
    assert settings.port == 8080


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("MRRFANTASY_DB_PATH", str(tmp_path / "league.sqlite"))
    monkeypatch.setenv("MRRFANTASY_LOG_LEVEL", "debug")
    monkeypatch.setenv("MRRFANTASY_PORT", "9000")

    settings = load_settings()

    assert settings.db_path == tmp_path / "league.sqlite"
    assert settings.log_level == "DEBUG"
    assert settings.port == 9000


def test_sqlite_uri_passes_through(monkeypatch):
    monkeypatch.setenv("MRRFANTASY_DB_PATH", "file:league?mode=memory&cache=shared")
    assert load_settings().db_path == "file:league?mode=memory&cache=shared"


def test_invalid_values_fall_back(monkeypatch, caplog):
    monkeypatch.setenv("MRRFANTASY_LOG_LEVEL", "chatty")
    monkeypatch.setenv("MRRFANTASY_PORT", "not-a-port")

    with caplog.at_level(logging.WARNING):
        settings = load_settings()

    assert settings.log_level == "INFO"
    assert settings.port == 8080
    assert "MRRFANTASY_PORT" in caplog.text


def test_port_is_clamped(monkeypatch):
    monkeypatch.setenv("MRRFANTASY_PORT", "70000")
    assert load_settings().port == 65535
