"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

TRANSACTION_TYPES = ("expense", "income")


class Transaction(SQLModel, table=True):
    """A single expense or income entry recorded by a user.

    ``amount`` is always non-negative; ``type`` carries the direction.
    """

    __tablename__: ClassVar[str] = "transaction"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    amount: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2, nullable=False)
    type: str = Field(default="expense", nullable=False, max_length=16, index=True)
    description: str = Field(default="", max_length=255)
    # Plain id, no FK: a deleted category leaves the id dangling (reported as Uncategorized).
    category_id: Optional[int] = Field(default=None, index=True)
    occurred_at: datetime = Field(nullable=False, index=True)
    is_fixed: bool = Field(default=False, nullable=False)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    satisfaction_rating: Optional[int] = Field(default=None, ge=1, le=5)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    @property
    def is_expense(self) -> bool:
        return self.type == "expense"
