"""Transaction repository protocol."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol

from ...models.transaction import Transaction


class TransactionRepository(Protocol):
    """Repository for managing transaction entities."""

    def get_by_id(self, transaction_id: int, *, user_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        ...

    def search(
        self,
        *,
        user_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        category_id: Optional[int] = None,
        txn_type: Optional[str] = None,
        is_fixed: Optional[bool] = None,
        text: Optional[str] = None,
        min_amount: Optional[Decimal] = None,
        max_amount: Optional[Decimal] = None,
    ) -> list[Transaction]:
        """Return the user's transactions matching every filter, newest first."""
        ...

    def create(self, transaction: Transaction, *, user_id: int) -> Transaction:
        """Create a new transaction."""
        ...

    def update(self, transaction: Transaction, *, user_id: int) -> Transaction:
        """Update an existing transaction."""
        ...

    def delete(self, transaction_id: int, *, user_id: int) -> None:
        """Delete a transaction by ID."""
        ...
