"""SQLModel table exports."""

from .budget import Budget
from .category import Category
from .goal import Goal
from .transaction import Transaction

__all__ = [
    "Budget",
    "Category",
    "Goal",
    "Transaction",
]
