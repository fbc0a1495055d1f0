"""Dashboard analytics routes."""

from __future__ import annotations

import logging
from datetime import datetime

from flask import current_app, jsonify, request

from ...extensions import get_analytics
from ...services.periods import DASHBOARD_PERIODS
from ..common import analytics_failure, current_user_id
from . import bp

logger = logging.getLogger(__name__)

MAX_TREND_MONTHS = 120


def _requested_period() -> str:
    """Return the period query arg, falling back to the configured default."""

    default = current_app.config["SPENDSCOPE_CONFIG"].DEFAULT_PERIOD
    period = request.args.get("period", "").strip()
    return period if period in DASHBOARD_PERIODS else default


def _requested_months() -> int:
    default = current_app.config["SPENDSCOPE_CONFIG"].TREND_MONTHS
    months = request.args.get("months", type=int)
    if months is None or months < 1:
        return default
    return min(months, MAX_TREND_MONTHS)


@bp.get("/stats")
def stats():
    """Headline numbers for the current month."""

    user_id = current_user_id()
    try:
        result = get_analytics().compute_dashboard_stats(user_id, datetime.now())
    except Exception:
        logger.exception("Dashboard stats failed", extra={"user_id": user_id})
        return analytics_failure()
    return jsonify(result.to_dict())


@bp.get("/category-breakdown")
def category_breakdown():
    user_id = current_user_id()
    period = _requested_period()
    try:
        slices = get_analytics().compute_category_breakdown(user_id, period, datetime.now())
    except Exception:
        logger.exception(
            "Category breakdown failed", extra={"user_id": user_id, "period": period}
        )
        return analytics_failure()
    return jsonify([item.to_dict() for item in slices])


@bp.get("/spending-trends")
def spending_trends():
    user_id = current_user_id()
    months = _requested_months()
    try:
        trends = get_analytics().compute_spending_trends(user_id, months, datetime.now())
    except Exception:
        logger.exception("Spending trends failed", extra={"user_id": user_id, "months": months})
        return analytics_failure()
    return jsonify([item.to_dict() for item in trends])
