"""Engine and session plumbing shared by the web app, CLI and tests."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Optional, Tuple

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig

SessionFactory = Callable[[], ContextManager[Session]]


def create_db_engine(config: BaseConfig) -> Engine:
    """Create SQLModel engine from configuration."""
    engine = create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())
    if engine.dialect.name == "sqlite":
        _install_sqlite_pragmas(engine, config.SQLITE_PRAGMAS)
    return engine


def _install_sqlite_pragmas(engine: Engine, pragmas: dict[str, str]) -> None:
    @event.listens_for(engine, "connect")
    def _apply(dbapi_connection, _record):  # pragma: no cover - driver callback
        cursor = dbapi_connection.cursor()
        for name, value in pragmas.items():
            cursor.execute(f"PRAGMA {name}={value}")
        cursor.close()


def init_database(engine: Engine) -> None:
    """Initialize database schema."""
    # Import all models to ensure they're registered
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def create_session_factory(engine: Engine) -> SessionFactory:
    """Create a session factory function."""

    @contextmanager
    def factory() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def bootstrap_database(config: Optional[BaseConfig] = None) -> Tuple[Engine, SessionFactory]:
    """Convenience bootstrap for engine + session_factory with schema init.

    Used by the app factory, the CLI and tests so they share engine options
    and session configuration. Returns (engine, session_factory).
    """

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, create_session_factory(engine)
