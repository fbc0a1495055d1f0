"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.transaction import Transaction


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, transaction_id: int, *, user_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

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
        """Return the user's transactions matching every filter, newest first.

        ``start_date`` and ``end_date`` are inclusive, like the amount bounds.
        """
        with self.session_factory() as session:
            statement = select(Transaction).where(Transaction.user_id == user_id)

            if start_date is not None:
                statement = statement.where(Transaction.occurred_at >= start_date)
            if end_date is not None:
                statement = statement.where(Transaction.occurred_at <= end_date)
            if category_id is not None:
                statement = statement.where(Transaction.category_id == category_id)
            if txn_type:
                statement = statement.where(Transaction.type == txn_type)
            if is_fixed is not None:
                statement = statement.where(Transaction.is_fixed == is_fixed)
            if text:
                statement = statement.where(Transaction.description.ilike(f"%{text}%"))  # type: ignore
            if min_amount is not None:
                statement = statement.where(Transaction.amount >= min_amount)
            if max_amount is not None:
                statement = statement.where(Transaction.amount <= max_amount)

            statement = statement.order_by(Transaction.occurred_at.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, transaction: Transaction, *, user_id: int) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            transaction.user_id = user_id
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def update(self, transaction: Transaction, *, user_id: int) -> Transaction:
        """Update an existing transaction."""
        with self.session_factory() as session:
            transaction.user_id = user_id
            transaction.updated_at = datetime.now(timezone.utc)
            transaction = session.merge(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def delete(self, transaction_id: int, *, user_id: int) -> None:
        """Delete a transaction by ID."""
        with self.session_factory() as session:
            transaction = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.user_id == user_id)
            ).first()
            if transaction:
                session.delete(transaction)
                session.commit()
