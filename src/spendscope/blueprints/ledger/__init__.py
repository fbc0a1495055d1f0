"""Ledger blueprint package: transactions and categories."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("ledger", __name__, url_prefix="/api")

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]
