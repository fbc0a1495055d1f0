"""Blueprint exports."""

from . import dashboard, ledger, planning

__all__ = [
    "dashboard",
    "ledger",
    "planning",
]
