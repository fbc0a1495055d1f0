"""Pytest configuration and shared fixtures for SpendScope tests.

This module provides database fixtures, test data factories, and helper utilities
for testing the analytics engine, repositories, and routes without touching a real
application database.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

# Import all models to ensure they're registered with SQLModel metadata
from spendscope import config as app_config
from spendscope import create_app
from spendscope.models import Budget, Category, Goal, Transaction
from sqlmodel import Session, SQLModel, create_engine

TEST_USER_ID = 1


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: SQLModel engine connected to a temporary database file
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the Callable[[], ContextManager[Session]] repos expect."""

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Flask app on a throwaway in-memory database."""
    monkeypatch.setenv("SPENDSCOPE_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("SPENDSCOPE_TREND_MONTHS", raising=False)
    monkeypatch.delenv("SPENDSCOPE_DEFAULT_USER_ID", raising=False)
    return create_app(config=app_config.TestingConfig())


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


# =============================================================================
# Test Data Factories
# =============================================================================


def make_transaction(
    amount: str | Decimal,
    occurred_at: datetime,
    *,
    txn_type: str = "expense",
    category_id: int | None = None,
    is_fixed: bool = False,
    description: str = "Test transaction",
    user_id: int = TEST_USER_ID,
) -> Transaction:
    """Build an unsaved transaction for pure engine tests."""
    return Transaction(
        user_id=user_id,
        amount=Decimal(str(amount)),
        type=txn_type,
        description=description,
        category_id=category_id,
        occurred_at=occurred_at,
        is_fixed=is_fixed,
    )


def make_budget(
    amount: str | Decimal,
    start_date: datetime,
    *,
    period: str = "monthly",
    category_id: int | None = None,
    alert_threshold: str | Decimal = "0.80",
    is_active: bool = True,
    name: str = "Test Budget",
    user_id: int = TEST_USER_ID,
) -> Budget:
    return Budget(
        user_id=user_id,
        name=name,
        amount=Decimal(str(amount)),
        period=period,
        start_date=start_date,
        category_id=category_id,
        alert_threshold=Decimal(str(alert_threshold)),
        is_active=is_active,
    )


@pytest.fixture
def category_factory(db_session):
    """Factory for creating and persisting categories."""

    def _create_category(
        name: str = "Test Category",
        color: str = "#FF5733",
        category_type: str = "expense",
        icon: str = "",
        user_id: int | None = TEST_USER_ID,
    ) -> Category:
        category = Category(
            user_id=user_id,
            name=name,
            color=color,
            type=category_type,
            icon=icon,
            is_default=user_id is None,
        )
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category

    return _create_category


@pytest.fixture
def transaction_factory(db_session):
    """Factory for creating and persisting transactions."""

    def _create_transaction(amount, occurred_at: datetime | None = None, **kwargs) -> Transaction:
        transaction = make_transaction(amount, occurred_at or datetime.now(), **kwargs)
        db_session.add(transaction)
        db_session.commit()
        db_session.refresh(transaction)
        return transaction

    return _create_transaction


@pytest.fixture
def budget_factory(db_session):
    """Factory for creating and persisting budgets."""

    def _create_budget(amount, start_date: datetime | None = None, **kwargs) -> Budget:
        budget = make_budget(amount, start_date or datetime.now(), **kwargs)
        db_session.add(budget)
        db_session.commit()
        db_session.refresh(budget)
        return budget

    return _create_budget


@pytest.fixture
def goal_factory(db_session):
    """Factory for creating and persisting savings goals."""

    def _create_goal(
        target_amount: str = "1000.00",
        current_amount: str = "0.00",
        name: str = "Emergency Fund",
        deadline: datetime | None = None,
        user_id: int = TEST_USER_ID,
    ) -> Goal:
        goal = Goal(
            user_id=user_id,
            name=name,
            target_amount=Decimal(target_amount),
            current_amount=Decimal(current_amount),
            deadline=deadline,
        )
        db_session.add(goal)
        db_session.commit()
        db_session.refresh(goal)
        return goal

    return _create_goal


@pytest.fixture
def seed_categories(category_factory):
    """Create a standard set of categories for testing.

    Returns:
        dict: Dictionary mapping short keys to Category instances
    """
    return {
        "food": category_factory(name="Food", color="#10B981"),
        "transport": category_factory(name="Transport", color="#3B82F6"),
        "salary": category_factory(name="Salary", color="#8B5CF6", category_type="income"),
    }


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance (default one cent)."""
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
