"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from flask import current_app, jsonify, request

ANALYTICS_FAILURE_MESSAGE = "Failed to compute analytics"


def current_user_id() -> int:
    """Resolve the acting user from the ``X-User-Id`` header.

    Falls back to the configured default user; authentication lives upstream.
    """

    raw = request.headers.get("X-User-Id", "").strip()
    if raw.isdigit():
        return int(raw)
    return current_app.config["SPENDSCOPE_CONFIG"].DEFAULT_USER_ID


def analytics_failure():
    return jsonify({"error": ANALYTICS_FAILURE_MESSAGE}), 500


def iso_or_none(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def validation_failure(errors: dict[str, list[str]]):
    return jsonify({"error": "validation_failed", "errors": errors}), 400


def not_found(kind: str, object_id: int):
    return jsonify({"error": f"{kind}_not_found", "id": object_id}), 404
