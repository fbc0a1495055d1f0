"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Interpret environment variable values as integers, ignoring junk."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "SpendScope"
    DB_FILENAME = "spendscope.db"
    DEFAULT_PERIOD = "thisMonth"
    SQLITE_PRAGMAS = {"journal_mode": "wal"}
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("SPENDSCOPE_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("SPENDSCOPE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("SPENDSCOPE_DATABASE_URL", self._build_sqlite_url())
        self.DEFAULT_USER_ID = _env_int("SPENDSCOPE_DEFAULT_USER_ID", 1)
        self.TREND_MONTHS = max(1, _env_int("SPENDSCOPE_TREND_MONTHS", 6))
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("SPENDSCOPE_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("SPENDSCOPE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite: throwaway in-memory database."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        from sqlalchemy.pool import StaticPool

        options = super().sqlalchemy_engine_options()
        # One shared connection so every session sees the same in-memory tables.
        options["poolclass"] = StaticPool
        return options
