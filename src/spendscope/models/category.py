"""Ledger category definitions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

UNCATEGORIZED_LABEL = "Uncategorized"
UNCATEGORIZED_COLOR = "#6B7280"


class Category(SQLModel, table=True):
    """Transaction category used for budgeting and reporting.

    Rows without a ``user_id`` are system defaults shared by every user.
    """

    __tablename__: ClassVar[str] = "category"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, index=True)
    name: str = Field(index=True, nullable=False, max_length=64)
    icon: str = Field(default="", max_length=32)
    color: str = Field(default=UNCATEGORIZED_COLOR, nullable=False, max_length=7)
    type: str = Field(default="expense", nullable=False, max_length=16)
    is_default: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
