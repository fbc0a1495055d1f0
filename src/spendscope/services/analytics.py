"""Per-request composition of repositories and the analytics engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..domain.repositories import (
    BudgetRepository,
    CategoryRepository,
    GoalRepository,
    TransactionRepository,
)
from ..models.budget import Budget
from ..models.goal import Goal
from ..models.transaction import Transaction
from . import budgeting
from .aggregation import (
    DEFAULT_TREND_MONTHS,
    CategorySlice,
    MonthlyTrend,
    category_breakdown,
    monthly_trends,
)
from .dashboard import DashboardStats, compose_dashboard_stats
from .goals import GoalProgress, GoalSummary, goal_progress, summarize_goals
from .periods import resolve_period

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsService:
    """Reads a fresh snapshot from the repositories on every call.

    Build one per request; instances hold no cached results.
    """

    transactions: TransactionRepository
    categories: CategoryRepository
    budgets: BudgetRepository
    goals: Optional[GoalRepository] = None

    def _snapshot(self, user_id: int, **filters) -> list[Transaction]:
        return self.transactions.search(user_id=user_id, **filters)

    def compute_dashboard_stats(self, user_id: int, now: datetime) -> DashboardStats:
        stats = compose_dashboard_stats(self._snapshot(user_id), now)
        logger.debug("Dashboard stats computed", extra={"user_id": user_id})
        return stats

    def compute_category_breakdown(
        self, user_id: int, period: str, now: datetime
    ) -> list[CategorySlice]:
        window = resolve_period(period, now)
        txns = self._snapshot(user_id, txn_type="expense")
        slices = category_breakdown(txns, self.categories.list_for_user(user_id=user_id), window)
        logger.debug(
            "Category breakdown computed",
            extra={"user_id": user_id, "period": period, "slices": len(slices)},
        )
        return slices

    def compute_spending_trends(
        self, user_id: int, months: int = DEFAULT_TREND_MONTHS, now: Optional[datetime] = None
    ) -> list[MonthlyTrend]:
        now = now or datetime.now()
        return monthly_trends(self._snapshot(user_id), now=now, months=months)

    def evaluate_budget(
        self, budget: Budget, transactions: Iterable[Transaction], now: Optional[datetime] = None
    ) -> budgeting.BudgetProgress:
        return budgeting.evaluate_budget(budget, transactions, now)

    def budget_overview(
        self, user_id: int, now: datetime
    ) -> tuple[budgeting.BudgetOverview, list[tuple[Budget, budgeting.BudgetProgress]]]:
        budgets = self.budgets.list_all(user_id=user_id)
        txns = self._snapshot(user_id, txn_type="expense")
        overview, evaluated = budgeting.summarize_budgets(budgets, txns, now)
        if overview.alerting_budgets:
            logger.info(
                "Budgets past their alert threshold",
                extra={"user_id": user_id, "alerting": overview.alerting_budgets},
            )
        return overview, evaluated

    def goal_overview(
        self, user_id: int, now: datetime
    ) -> tuple[GoalSummary, list[tuple[Goal, GoalProgress]]]:
        if self.goals is None:
            raise RuntimeError("Goal repository not configured")
        items = self.goals.list_all(user_id=user_id)
        return summarize_goals(items), [(g, goal_progress(g, now)) for g in items]
