"""Service module exports."""

from . import (
    aggregation,
    analytics,
    budgeting,
    dashboard,
    goals,
    periods,
)

__all__ = [
    "aggregation",
    "analytics",
    "budgeting",
    "dashboard",
    "goals",
    "periods",
]
