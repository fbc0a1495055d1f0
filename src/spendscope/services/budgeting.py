"""Budgeting domain services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from ..models.budget import DEFAULT_ALERT_THRESHOLD, Budget
from ..models.transaction import Transaction
from .aggregation import ZERO, safe_percentage, sum_transactions, to_money
from .periods import budget_window

STATUS_ON_TRACK = "on-track"
STATUS_WARNING = "warning"
STATUS_OVER_BUDGET = "over-budget"


@dataclass(frozen=True, slots=True)
class BudgetProgress:
    """Spent-vs-allotted snapshot for a single budget."""

    spent: Decimal
    percentage: float
    remaining: Decimal
    status: str

    @property
    def is_alerting(self) -> bool:
        return self.status in (STATUS_WARNING, STATUS_OVER_BUDGET)

    def to_dict(self) -> dict[str, object]:
        return {
            "spent": float(self.spent),
            "percentage": self.percentage,
            "remaining": float(self.remaining),
            "status": self.status,
        }


@dataclass(frozen=True, slots=True)
class BudgetOverview:
    """Roll-up across every budget a user holds."""

    total_budgeted: Decimal
    total_spent: Decimal
    overall_progress: float
    active_budgets: int
    alerting_budgets: int

    @property
    def total_remaining(self) -> Decimal:
        return self.total_budgeted - self.total_spent

    def to_dict(self) -> dict[str, object]:
        return {
            "totalBudgeted": float(self.total_budgeted),
            "totalSpent": float(self.total_spent),
            "totalRemaining": float(self.total_remaining),
            "overallProgress": self.overall_progress,
            "activeBudgets": self.active_budgets,
            "alertingBudgets": self.alerting_budgets,
        }


def classify_status(spent: Decimal, allotted: Decimal, alert_threshold: object) -> str:
    """Map spend against the allotted amount onto a budget status.

    Compared in Decimal so the rounded percentage never decides the status.
    Over-budget takes precedence over the warning threshold; a zero allotment
    is always on track.
    """

    if allotted <= 0:
        return STATUS_ON_TRACK
    if spent >= allotted:
        return STATUS_OVER_BUDGET
    threshold = DEFAULT_ALERT_THRESHOLD if alert_threshold is None else alert_threshold
    if spent >= allotted * to_money(threshold):
        return STATUS_WARNING
    return STATUS_ON_TRACK


def evaluate_budget(
    budget: Budget,
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> BudgetProgress:
    """Compute spend, percentage, remaining and status for ``budget``.

    The window is the budget's own cycle starting at ``start_date``; ``now``
    does not move it. A cycle that has not started yet simply reports zero.
    """

    window = budget_window(budget.period, budget.start_date)
    spent = sum_transactions(
        transactions,
        window,
        txn_type="expense",
        category_id=budget.category_id,
    ).amount
    allotted = to_money(budget.amount)
    percentage = safe_percentage(spent, allotted)
    return BudgetProgress(
        spent=spent,
        percentage=percentage,
        remaining=allotted - spent,
        status=classify_status(spent, allotted, budget.alert_threshold),
    )


def summarize_budgets(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> tuple[BudgetOverview, list[tuple[Budget, BudgetProgress]]]:
    """Evaluate every budget and roll the results into an overview."""

    txns = list(transactions)
    evaluated = [(budget, evaluate_budget(budget, txns, now)) for budget in budgets]

    total_budgeted = sum((to_money(budget.amount) for budget, _ in evaluated), ZERO)
    total_spent = sum((progress.spent for _, progress in evaluated), ZERO)
    overview = BudgetOverview(
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        overall_progress=safe_percentage(total_spent, total_budgeted),
        active_budgets=sum(1 for budget, _ in evaluated if budget.is_active),
        alerting_budgets=sum(1 for _, progress in evaluated if progress.is_alerting),
    )
    return overview, evaluated
