"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


logger = logging.getLogger(__name__)

_DATA_DIR_ENV = "DRAFTPOOL_DATA_DIR"
_DB_PATH_ENV = "DRAFTPOOL_DB_PATH"
_ADMIN_SECRET_ENV = "DRAFTPOOL_ADMIN_SECRET"
_ALLOWED_ORIGINS_ENV = "DRAFTPOOL_ALLOWED_ORIGINS"
_CACHE_SEASONS_ENV = "DRAFTPOOL_CACHE_SEASONS"

_DEFAULT_ALLOWED_ORIGINS = ("http://localhost:8080", "http://127.0.0.1:8080")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    db_path: Path | str = Path("draftpool.sqlite")
    admin_secret: Optional[str] = None
    allowed_origins: Tuple[str, ...] = field(default=_DEFAULT_ALLOWED_ORIGINS)
    cache_seasons: bool = True


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    logger.warning("Invalid boolean for %s: %s; using default %s", name, raw, default)
    return default


def _env_origins(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    origins = tuple(part.strip() for part in raw.split(",") if part.strip())
    if not origins:
        logger.warning("Empty origin list for %s; using defaults", name)
        return default
    return origins


def load_settings() -> Settings:
    db_path: Path | str
    env_db = os.getenv(_DB_PATH_ENV)
    if env_db and env_db.startswith("file:"):
        db_path = env_db
    else:
        db_path = Path(env_db) if env_db else Settings.db_path

    secret = os.getenv(_ADMIN_SECRET_ENV) or None
    return Settings(
        data_dir=Path(os.getenv(_DATA_DIR_ENV) or Settings.data_dir),
        db_path=db_path,
        admin_secret=secret,
        allowed_origins=_env_origins(_ALLOWED_ORIGINS_ENV, _DEFAULT_ALLOWED_ORIGINS),
        cache_seasons=_env_bool(_CACHE_SEASONS_ENV, True),
    )
