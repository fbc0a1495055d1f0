"""Savings goal progress helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from ..errors import InvalidInputError
from ..models.goal import Goal
from .aggregation import ZERO, safe_percentage, to_money

NEAR_DEADLINE_DAYS = 30


@dataclass(frozen=True, slots=True)
class GoalProgress:
    goal_id: Optional[int]
    percentage: float
    remaining: Decimal
    days_until_deadline: Optional[int]

    @property
    def is_overdue(self) -> bool:
        return self.days_until_deadline is not None and self.days_until_deadline < 0

    @property
    def is_near_deadline(self) -> bool:
        return (
            self.days_until_deadline is not None
            and 0 < self.days_until_deadline <= NEAR_DEADLINE_DAYS
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "goalId": self.goal_id,
            "percentage": self.percentage,
            "remaining": float(self.remaining),
            "daysUntilDeadline": self.days_until_deadline,
            "isOverdue": self.is_overdue,
            "isNearDeadline": self.is_near_deadline,
        }


@dataclass(frozen=True, slots=True)
class GoalSummary:
    total_goals: int
    completed_goals: int
    total_target: Decimal
    total_current: Decimal
    overall_progress: float

    @property
    def active_goals(self) -> int:
        return self.total_goals - self.completed_goals

    def to_dict(self) -> dict[str, object]:
        return {
            "totalGoals": self.total_goals,
            "completedGoals": self.completed_goals,
            "activeGoals": self.active_goals,
            "totalTargetAmount": float(self.total_target),
            "totalCurrentAmount": float(self.total_current),
            "overallProgress": self.overall_progress,
        }


def days_until(deadline: Optional[datetime], now: datetime) -> Optional[int]:
    """Whole days left before ``deadline``, rounded up; negative once it has passed."""

    if deadline is None:
        return None
    return math.ceil((deadline - now).total_seconds() / 86400)


def goal_progress(goal: Goal, now: datetime) -> GoalProgress:
    target = to_money(goal.target_amount)
    current = to_money(goal.current_amount)
    return GoalProgress(
        goal_id=goal.id,
        percentage=min(100.0, safe_percentage(current, target)),
        remaining=max(target - current, ZERO),
        days_until_deadline=days_until(goal.deadline, now),
    )


def add_progress(goal: Goal, amount: object) -> Goal:
    """Credit ``amount`` to the goal and flag it completed once the target is met."""

    increment = to_money(amount)
    if increment < 0:
        raise InvalidInputError(f"Progress amount must not be negative: {amount!r}")
    goal.current_amount = to_money(goal.current_amount) + increment
    goal.is_completed = goal.current_amount >= to_money(goal.target_amount)
    return goal


def summarize_goals(goals: Iterable[Goal]) -> GoalSummary:
    items = list(goals)
    total_target = sum((to_money(g.target_amount) for g in items), ZERO)
    total_current = sum((to_money(g.current_amount) for g in items), ZERO)
    return GoalSummary(
        total_goals=len(items),
        completed_goals=sum(1 for g in items if g.is_completed),
        total_target=total_target,
        total_current=total_current,
        overall_progress=safe_percentage(total_current, total_target),
    )
