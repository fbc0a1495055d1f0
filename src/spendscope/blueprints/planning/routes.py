"""Budget and savings goal routes."""

from __future__ import annotations

import logging
from datetime import datetime

from flask import jsonify, request

from ...errors import InvalidInputError
from ...extensions import get_analytics
from ...models.budget import Budget
from ...models.goal import Goal
from ...services.goals import add_progress, goal_progress
from ..common import (
    analytics_failure,
    current_user_id,
    iso_or_none,
    not_found,
    validation_failure,
)
from . import bp
from .forms import BudgetForm, GoalForm

logger = logging.getLogger(__name__)


def _budget_payload(budget: Budget) -> dict[str, object]:
    return {
        "id": budget.id,
        "name": budget.name,
        "categoryId": budget.category_id,
        "amount": float(budget.amount),
        "period": budget.period,
        "startDate": iso_or_none(budget.start_date),
        "endDate": iso_or_none(budget.end_date),
        "isActive": budget.is_active,
        "alertThreshold": float(budget.alert_threshold),
    }


def _goal_payload(goal: Goal) -> dict[str, object]:
    return {
        "id": goal.id,
        "name": goal.name,
        "targetAmount": float(goal.target_amount),
        "currentAmount": float(goal.current_amount),
        "categoryId": goal.category_id,
        "deadline": iso_or_none(goal.deadline),
        "isCompleted": goal.is_completed,
        "priority": goal.priority,
    }


@bp.get("/budgets")
def budgets():
    """List budgets with their live progress and an overall roll-up."""

    user_id = current_user_id()
    try:
        overview, evaluated = get_analytics().budget_overview(user_id, datetime.now())
    except Exception:
        logger.exception("Budget evaluation failed", extra={"user_id": user_id})
        return analytics_failure()
    return jsonify(
        {
            "budgets": [
                {**_budget_payload(budget), "progress": progress.to_dict()}
                for budget, progress in evaluated
            ],
            "overview": overview.to_dict(),
        }
    )


@bp.post("/budgets")
def create_budget():
    user_id = current_user_id()
    form = BudgetForm.from_mapping(request.get_json(silent=True))
    if not form.validate():
        return validation_failure(form.errors)

    service = get_analytics()
    budget = service.budgets.create(form.to_model(user_id), user_id=user_id)
    logger.info("Budget created", extra={"user_id": user_id, "budget_id": budget.id})
    progress = service.evaluate_budget(
        budget, service.transactions.search(user_id=user_id, txn_type="expense"), datetime.now()
    )
    return jsonify({**_budget_payload(budget), "progress": progress.to_dict()}), 201


@bp.delete("/budgets/<int:budget_id>")
def delete_budget(budget_id: int):
    user_id = current_user_id()
    repo = get_analytics().budgets
    if repo.get_by_id(budget_id, user_id=user_id) is None:
        return not_found("budget", budget_id)
    repo.delete(budget_id, user_id=user_id)
    logger.info("Budget deleted", extra={"user_id": user_id, "budget_id": budget_id})
    return jsonify({"success": True})


@bp.get("/goals")
def goals():
    user_id = current_user_id()
    try:
        summary, evaluated = get_analytics().goal_overview(user_id, datetime.now())
    except Exception:
        logger.exception("Goal summary failed", extra={"user_id": user_id})
        return analytics_failure()
    return jsonify(
        {
            "goals": [
                {**_goal_payload(goal), "progress": progress.to_dict()}
                for goal, progress in evaluated
            ],
            "summary": summary.to_dict(),
        }
    )


@bp.post("/goals/<int:goal_id>/progress")
def goal_add_progress(goal_id: int):
    """Credit an amount towards a goal."""

    user_id = current_user_id()
    repo = get_analytics().goals
    goal = repo.get_by_id(goal_id, user_id=user_id)
    if goal is None:
        return not_found("goal", goal_id)

    payload = request.get_json(silent=True) or {}
    try:
        add_progress(goal, payload.get("amount"))
    except InvalidInputError as exc:
        return jsonify({"error": "invalid_amount", "message": str(exc)}), 400

    goal = repo.update(goal, user_id=user_id)
    logger.info(
        "Goal progress recorded",
        extra={"user_id": user_id, "goal_id": goal_id, "completed": goal.is_completed},
    )
    return jsonify({**_goal_payload(goal), "progress": goal_progress(goal, datetime.now()).to_dict()})


@bp.post("/goals")
def create_goal():
    user_id = current_user_id()
    form = GoalForm.from_mapping(request.get_json(silent=True))
    if not form.validate():
        return validation_failure(form.errors)

    goal = get_analytics().goals.create(form.to_model(user_id), user_id=user_id)
    logger.info("Goal created", extra={"user_id": user_id, "goal_id": goal.id})
    return (
        jsonify({**_goal_payload(goal), "progress": goal_progress(goal, datetime.now()).to_dict()}),
        201,
    )


@bp.delete("/goals/<int:goal_id>")
def delete_goal(goal_id: int):
    user_id = current_user_id()
    repo = get_analytics().goals
    if repo.get_by_id(goal_id, user_id=user_id) is None:
        return not_found("goal", goal_id)
    repo.delete(goal_id, user_id=user_id)
    logger.info("Goal deleted", extra={"user_id": user_id, "goal_id": goal_id})
    return jsonify({"success": True})
