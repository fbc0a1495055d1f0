"""Database and extension wiring for SpendScope."""

from __future__ import annotations

from flask import Flask, current_app, g

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelCategoryRepository,
    SQLModelGoalRepository,
    SQLModelTransactionRepository,
)
from .services.analytics import AnalyticsService

_EXTENSION_KEY = "spendscope.db"


def init_db(app: Flask) -> None:
    """Initialize the SQLModel engine using configuration from the app."""

    config: BaseConfig = app.config["SPENDSCOPE_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    app.extensions[_EXTENSION_KEY] = {"engine": engine, "session_factory": session_factory}

    @app.teardown_appcontext
    def _drop_request_services(exception: BaseException | None) -> None:
        g.pop("analytics", None)


def get_session_factory() -> SessionFactory:
    state = current_app.extensions.get(_EXTENSION_KEY)
    if state is None:  # pragma: no cover
        raise RuntimeError("Database engine not initialized")
    return state["session_factory"]


def get_analytics() -> AnalyticsService:
    """Return the analytics service for this request, building it on first use."""

    if "analytics" not in g:
        factory = get_session_factory()
        g.analytics = AnalyticsService(
            transactions=SQLModelTransactionRepository(factory),
            categories=SQLModelCategoryRepository(factory),
            budgets=SQLModelBudgetRepository(factory),
            goals=SQLModelGoalRepository(factory),
        )
    return g.analytics

