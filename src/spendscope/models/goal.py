"""Savings goal table."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

GOAL_PRIORITIES = ("low", "medium", "high")


class Goal(SQLModel, table=True):
    """A savings target advanced by explicit progress entries."""

    __tablename__: ClassVar[str] = "goal"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    name: str = Field(nullable=False, max_length=64)
    target_amount: Decimal = Field(max_digits=10, decimal_places=2, nullable=False)
    current_amount: Decimal = Field(
        default=Decimal("0.00"), max_digits=10, decimal_places=2, nullable=False
    )
    category_id: Optional[int] = Field(default=None, index=True)
    deadline: Optional[datetime] = Field(default=None)
    is_completed: bool = Field(default=False, nullable=False)
    priority: str = Field(default="medium", nullable=False, max_length=8)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
