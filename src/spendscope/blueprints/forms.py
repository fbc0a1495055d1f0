"""Validation helpers for JSON request payloads."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

from ..errors import InvalidInputError
from ..services.aggregation import to_money

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


class PayloadForm:
    """Binds a JSON body and accumulates per-field errors.

    Subclasses implement :meth:`validate`, populating typed attributes and
    returning ``True`` when no errors were recorded.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self.data: dict[str, Any] = dict(data or {})
        self.errors: dict[str, list[str]] = {}

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]):
        """Create a form populated from request data."""

        return cls(data)

    def validate(self) -> bool:  # pragma: no cover - abstract
        raise NotImplementedError

    def _add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def _present(self, key: str) -> bool:
        value = self.data.get(key)
        return value is not None and not (isinstance(value, str) and not value.strip())

    def _text(self, key: str, *, required: bool = False, max_length: int = 255) -> str:
        value = self.data.get(key)
        text = value.strip() if isinstance(value, str) else ""
        if value is not None and not isinstance(value, str):
            self._add_error(key, "Must be a string.")
        elif required and not text:
            self._add_error(key, "This field is required.")
        elif len(text) > max_length:
            self._add_error(key, f"Must be {max_length} characters or fewer.")
        return text

    def _money(
        self,
        key: str,
        *,
        required: bool = True,
        default: Optional[Decimal] = None,
        allow_zero: bool = True,
    ) -> Optional[Decimal]:
        if not self._present(key):
            if required:
                self._add_error(key, "Amount is required.")
            return default
        try:
            amount = to_money(self.data[key])
        except InvalidInputError:
            self._add_error(key, "Enter a valid number for the amount.")
            return default
        if amount < 0:
            self._add_error(key, "Amount cannot be negative.")
            return default
        if amount == 0 and not allow_zero:
            self._add_error(key, "Amount cannot be zero.")
            return default
        return amount

    def _datetime(self, key: str, *, required: bool = True) -> Optional[datetime]:
        if not self._present(key):
            if required:
                self._add_error(key, "Date is required.")
            return None
        raw = str(self.data[key]).strip()
        try:
            if len(raw) == 10:
                return datetime.strptime(raw, "%Y-%m-%d")
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            self._add_error(key, "Enter a valid date (YYYY-MM-DD or ISO 8601).")
            return None
        # Analytics compare naive local datetimes.
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
        return parsed

    def _optional_id(self, key: str) -> Optional[int]:
        if not self._present(key):
            return None
        value = self.data[key]
        if isinstance(value, bool):
            self._add_error(key, "Must be a whole number.")
            return None
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            self._add_error(key, "Must be a whole number.")
            return None
        if parsed <= 0:
            self._add_error(key, "Must be greater than zero if provided.")
            return None
        return parsed

    def _choice(self, key: str, choices: Iterable[str], default: Optional[str]) -> Optional[str]:
        if not self._present(key):
            return default
        value = self.data[key]
        options = tuple(choices)
        if value not in options:
            self._add_error(key, f"Must be one of: {', '.join(options)}.")
            return default
        return value

    def _flag(self, key: str, default: bool) -> bool:
        value = self.data.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
            return value.strip().lower() == "true"
        self._add_error(key, "Must be true or false.")
        return default

    def _color(self, key: str, default: str) -> str:
        if not self._present(key):
            return default
        value = self.data[key]
        if not isinstance(value, str) or not _HEX_COLOR.match(value):
            self._add_error(key, "Must be a hex color like #10B981.")
            return default
        return value.upper()
