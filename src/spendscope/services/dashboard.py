"""Dashboard headline statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from ..models.transaction import Transaction
from .aggregation import safe_percentage, sum_transactions
from .periods import resolve_period


@dataclass(frozen=True, slots=True)
class DashboardStats:
    """Current-month figures compared against the previous month.

    ``total_balance`` is this month's income minus expenses, not a lifetime
    running balance.
    """

    total_balance: Decimal
    this_month_expenses: Decimal
    this_month_income: Decimal
    expense_change: float
    income_change: float
    savings_rate: float

    def to_dict(self) -> dict[str, object]:
        return {
            "totalBalance": float(self.total_balance),
            "thisMonthExpenses": float(self.this_month_expenses),
            "thisMonthIncome": float(self.this_month_income),
            "expenseChange": self.expense_change,
            "incomeChange": self.income_change,
            "savingsRate": self.savings_rate,
        }


def percent_change(current: Decimal, previous: Decimal) -> float:
    """Relative change from ``previous`` to ``current``; 0 when there is no baseline."""

    return safe_percentage(current - previous, previous)


def compose_dashboard_stats(transactions: Iterable[Transaction], now: datetime) -> DashboardStats:
    txns = list(transactions)
    this_month = resolve_period("thisMonth", now)
    last_month = resolve_period("lastMonth", now)

    this_expenses = sum_transactions(txns, this_month, txn_type="expense").amount
    this_income = sum_transactions(txns, this_month, txn_type="income").amount
    last_expenses = sum_transactions(txns, last_month, txn_type="expense").amount
    last_income = sum_transactions(txns, last_month, txn_type="income").amount

    net = this_income - this_expenses
    return DashboardStats(
        total_balance=net,
        this_month_expenses=this_expenses,
        this_month_income=this_income,
        expense_change=percent_change(this_expenses, last_expenses),
        income_change=percent_change(this_income, last_income),
        savings_rate=safe_percentage(net, this_income),
    )
