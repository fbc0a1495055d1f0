"""Budgeting tables."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

BUDGET_PERIODS = ("weekly", "monthly", "yearly")
DEFAULT_ALERT_THRESHOLD = Decimal("0.80")


class Budget(SQLModel, table=True):
    """A spending limit over a recurring cycle anchored at ``start_date``.

    Spend is never stored here; it is derived from transactions on read.
    A null ``category_id`` means the budget covers every category.
    """

    __tablename__: ClassVar[str] = "budget"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    name: str = Field(nullable=False, max_length=64)
    category_id: Optional[int] = Field(default=None, index=True)
    amount: Decimal = Field(max_digits=10, decimal_places=2, nullable=False)
    period: str = Field(default="monthly", nullable=False, max_length=16)
    start_date: datetime = Field(nullable=False, index=True)
    end_date: Optional[datetime] = Field(default=None)
    is_active: bool = Field(default=True, nullable=False)
    alert_threshold: Decimal = Field(
        default=DEFAULT_ALERT_THRESHOLD, max_digits=3, decimal_places=2, nullable=False
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
