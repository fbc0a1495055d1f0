"""Budget and goal payload validation."""

from __future__ import annotations

from decimal import Decimal

from ...models.budget import BUDGET_PERIODS, DEFAULT_ALERT_THRESHOLD, Budget
from ...models.goal import GOAL_PRIORITIES, Goal
from ..forms import PayloadForm


class BudgetForm(PayloadForm):
    """New budget submitted as JSON; ``alertThreshold`` is a 0-1 fraction."""

    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._text("name", required=True, max_length=64)
        self.amount = self._money("amount")
        self.period = self._choice("period", BUDGET_PERIODS, "monthly")
        self.start_date = self._datetime("startDate")
        self.end_date = self._datetime("endDate", required=False)
        self.category_id = self._optional_id("categoryId")
        self.is_active = self._flag("isActive", True)

        self.alert_threshold = self._money(
            "alertThreshold", required=False, default=DEFAULT_ALERT_THRESHOLD
        )
        if self.alert_threshold is not None and self.alert_threshold > Decimal("1"):
            self._add_error("alertThreshold", "Threshold must be between 0 and 1.")

        if self.start_date and self.end_date and self.end_date < self.start_date:
            self._add_error("endDate", "End date cannot be before the start date.")
        return not self.errors

    def to_model(self, user_id: int) -> Budget:
        return Budget(
            user_id=user_id,
            name=self.name,
            amount=self.amount,
            period=self.period,
            start_date=self.start_date,
            end_date=self.end_date,
            category_id=self.category_id,
            is_active=self.is_active,
            alert_threshold=self.alert_threshold,
        )


class GoalForm(PayloadForm):
    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._text("name", required=True, max_length=64)
        self.target_amount = self._money("targetAmount", allow_zero=False)
        self.current_amount = self._money(
            "currentAmount", required=False, default=Decimal("0.00")
        )
        self.category_id = self._optional_id("categoryId")
        self.deadline = self._datetime("deadline", required=False)
        self.priority = self._choice("priority", GOAL_PRIORITIES, "medium")
        return not self.errors

    def to_model(self, user_id: int) -> Goal:
        return Goal(
            user_id=user_id,
            name=self.name,
            target_amount=self.target_amount,
            current_amount=self.current_amount,
            category_id=self.category_id,
            deadline=self.deadline,
            priority=self.priority,
            is_completed=self.current_amount >= self.target_amount,
        )
