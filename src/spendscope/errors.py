"""Exception types raised by the analytics engine."""

from __future__ import annotations


class AnalyticsError(Exception):
    """Base class for analytics failures surfaced to the HTTP layer."""


class InvalidPeriodError(AnalyticsError, ValueError):
    """Raised when a period token cannot be resolved to a date window."""

    def __init__(self, token: object):
        self.token = token
        super().__init__(f"Unrecognized period: {token!r}")


class InvalidInputError(AnalyticsError, ValueError):
    """Raised when a record handed to the engine carries a malformed field."""
