"""Aggregation helpers shared by the dashboard, budget and goal services."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Optional

from ..errors import InvalidInputError
from ..models.category import UNCATEGORIZED_COLOR, UNCATEGORIZED_LABEL, Category
from ..models.transaction import Transaction
from .periods import DateWindow, month_key, month_keys, trailing_months_window

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
DEFAULT_TREND_MONTHS = 6


def to_money(value: object) -> Decimal:
    """Coerce ``value`` to a Decimal with two decimal places."""

    if isinstance(value, bool):
        raise InvalidInputError(f"Invalid amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidInputError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise InvalidInputError(f"Invalid amount: {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def safe_ratio(numerator: object, denominator: object) -> float:
    """Return ``numerator / denominator``, or 0.0 when the denominator is zero."""

    denominator = float(denominator)
    if denominator == 0:
        return 0.0
    return float(numerator) / denominator


def safe_percentage(numerator: object, denominator: object) -> float:
    """Percentage form of :func:`safe_ratio`, rounded to 2 places."""

    return round(safe_ratio(numerator, denominator) * 100, 2)


@dataclass(frozen=True, slots=True)
class AggregateTotal:
    amount: Decimal
    count: int


@dataclass(frozen=True, slots=True)
class CategorySlice:
    """One row of a category breakdown."""

    category_id: Optional[int]
    category: str
    amount: Decimal
    percentage: float
    color: str
    transaction_count: int

    def to_dict(self) -> dict[str, object]:
        return {
            "categoryId": self.category_id,
            "category": self.category,
            "amount": float(self.amount),
            "percentage": self.percentage,
            "color": self.color,
            "transactionCount": self.transaction_count,
        }


@dataclass(frozen=True, slots=True)
class MonthlyTrend:
    month: str
    total_expenses: Decimal
    total_income: Decimal

    @property
    def net_savings(self) -> Decimal:
        return self.total_income - self.total_expenses

    def to_dict(self) -> dict[str, object]:
        return {
            "month": self.month,
            "totalExpenses": float(self.total_expenses),
            "totalIncome": float(self.total_income),
            "netSavings": float(self.net_savings),
        }


def filter_transactions(
    transactions: Iterable[Transaction],
    window: Optional[DateWindow] = None,
    *,
    txn_type: Optional[str] = None,
    category_id: Optional[int] = None,
    fixed_only: bool = False,
) -> list[Transaction]:
    """Return the transactions matching every supplied criterion.

    ``category_id=None`` means no category filter, not "uncategorized only".
    """

    matched = []
    for txn in transactions:
        if window is not None and not window.contains(txn.occurred_at):
            continue
        if txn_type is not None and txn.type != txn_type:
            continue
        if category_id is not None and txn.category_id != category_id:
            continue
        if fixed_only and not txn.is_fixed:
            continue
        matched.append(txn)
    return matched


def sum_transactions(
    transactions: Iterable[Transaction],
    window: Optional[DateWindow] = None,
    *,
    txn_type: Optional[str] = None,
    category_id: Optional[int] = None,
    fixed_only: bool = False,
) -> AggregateTotal:
    """Sum amounts of the matching transactions and count them."""

    matched = filter_transactions(
        transactions,
        window,
        txn_type=txn_type,
        category_id=category_id,
        fixed_only=fixed_only,
    )
    total = sum((to_money(txn.amount) for txn in matched), ZERO)
    return AggregateTotal(amount=total, count=len(matched))


def category_breakdown(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    window: DateWindow,
) -> list[CategorySlice]:
    """Group expense spend in ``window`` by category, largest first.

    Percentages are shares of the window's expense total. Transactions whose
    category is unset or no longer exists collapse into one "Uncategorized" row.
    """

    lookup = {c.id: c for c in categories if c.id is not None}
    totals: dict[Optional[int], Decimal] = defaultdict(lambda: ZERO)
    counts: dict[Optional[int], int] = defaultdict(int)

    for txn in filter_transactions(transactions, window, txn_type="expense"):
        key = txn.category_id if txn.category_id in lookup else None
        totals[key] += to_money(txn.amount)
        counts[key] += 1

    grand_total = sum(totals.values(), ZERO)

    slices = []
    for key, amount in totals.items():
        category = lookup.get(key)
        slices.append(
            CategorySlice(
                category_id=key,
                category=category.name if category else UNCATEGORIZED_LABEL,
                amount=amount,
                percentage=safe_percentage(amount, grand_total),
                color=(category.color if category and category.color else UNCATEGORIZED_COLOR),
                transaction_count=counts[key],
            )
        )
    slices.sort(key=lambda item: (-item.amount, item.category))
    return slices


def monthly_trends(
    transactions: Iterable[Transaction],
    *,
    now: datetime,
    months: int = DEFAULT_TREND_MONTHS,
) -> list[MonthlyTrend]:
    """Expense/income totals for each of the trailing ``months`` calendar months.

    Months without activity are emitted with zero sums so the series always
    has exactly ``months`` points, oldest first.
    """

    window = trailing_months_window(months, now)
    buckets: dict[str, dict[str, Decimal]] = {
        key: {"expense": ZERO, "income": ZERO} for key in month_keys(window)
    }

    for txn in filter_transactions(transactions, window):
        bucket = buckets[month_key(txn.occurred_at)]
        if txn.type in bucket:
            bucket[txn.type] += to_money(txn.amount)

    return [
        MonthlyTrend(month=key, total_expenses=bucket["expense"], total_income=bucket["income"])
        for key, bucket in buckets.items()
    ]
