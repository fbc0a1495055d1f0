"""Ledger payload validation."""

from __future__ import annotations

from ...models.category import UNCATEGORIZED_COLOR, Category
from ...models.transaction import TRANSACTION_TYPES, Transaction
from ..forms import PayloadForm


class TransactionForm(PayloadForm):
    """Expense or income entry submitted as JSON."""

    def validate(self) -> bool:
        self.errors.clear()
        self.amount = self._money("amount", allow_zero=False)
        self.type = self._choice("type", TRANSACTION_TYPES, "expense")
        self.description = self._text("description")
        self.category_id = self._optional_id("categoryId")
        self.occurred_at = self._datetime("date")
        self.is_fixed = self._flag("isFixed", False)

        tags = self.data.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            self._add_error("tags", "Tags must be a list of strings.")
            tags = []
        self.tags = [tag.strip() for tag in tags if tag.strip()]

        rating = self.data.get("satisfactionRating")
        self.satisfaction_rating = None
        if rating is not None:
            if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
                self._add_error("satisfactionRating", "Rating must be a whole number from 1 to 5.")
            else:
                self.satisfaction_rating = rating

        return not self.errors

    def to_model(self, user_id: int) -> Transaction:
        return Transaction(
            user_id=user_id,
            amount=self.amount,
            type=self.type,
            description=self.description,
            category_id=self.category_id,
            occurred_at=self.occurred_at,
            is_fixed=self.is_fixed,
            tags=self.tags,
            satisfaction_rating=self.satisfaction_rating,
        )


class CategoryForm(PayloadForm):
    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._text("name", required=True, max_length=64)
        self.icon = self._text("icon", max_length=32)
        self.color = self._color("color", UNCATEGORIZED_COLOR)
        self.type = self._choice("type", TRANSACTION_TYPES, "expense")
        return not self.errors

    def to_model(self, user_id: int) -> Category:
        return Category(
            user_id=user_id,
            name=self.name,
            icon=self.icon,
            color=self.color,
            type=self.type,
            is_default=False,
        )


class TransactionFilterForm(PayloadForm):
    """Query-string filters for listing transactions."""

    def validate(self) -> bool:
        self.errors.clear()
        self.start_date = self._datetime("startDate", required=False)
        self.end_date = self._datetime("endDate", required=False)
        self.category_id = self._optional_id("categoryId")
        self.type = self._choice("type", TRANSACTION_TYPES, None)
        self.text = self._text("search", max_length=100) or None
        return not self.errors

    def filters(self) -> dict[str, object]:
        return {
            "start_date": self.start_date,
            "end_date": self.end_date,
            "category_id": self.category_id,
            "txn_type": self.type,
            "text": self.text,
        }
