"""Dashboard analytics blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")

from . import routes  # noqa: E402,F401 - ensure routes register

__all__ = ["bp"]
