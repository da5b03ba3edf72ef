"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger(__name__)

_DB_PATH_ENV = "MRRFANTASY_DB_PATH"
_LOG_LEVEL_ENV = "MRRFANTASY_LOG_LEVEL"
_HOST_ENV = "MRRFANTASY_HOST"
_PORT_ENV = "MRRFANTASY_PORT"

_DEFAULT_DB_PATH = Path("mrrfantasy.sqlite")
_DEFAULT_HOST = "0.0.0.0"
_DEFAULT_PORT = 8080


@dataclass(frozen=True)
class Settings:
    db_path: Path | str
    log_level: str
    host: str
    port: int


def _env_int(name: str, default: int, *, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def _env_log_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Invalid log level for %s: %s; using default %s", name, raw, default)
        return default
    return level


def _env_db_path(name: str, default: Path) -> Path | str:
    raw = os.getenv(name)
    if not raw:
        return default
    # SQLite URIs are passed through untouched.
    if raw.startswith("file:"):
        return raw
    return Path(raw)


def load_settings() -> Settings:
    return Settings(
        db_path=_env_db_path(_DB_PATH_ENV, _DEFAULT_DB_PATH),
        log_level=_env_log_level(_LOG_LEVEL_ENV, "INFO"),
        host=os.getenv(_HOST_ENV, _DEFAULT_HOST),
        port=_env_int(_PORT_ENV, _DEFAULT_PORT, min_value=1, max_value=65535),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
