"""Resolve named periods and budget cycles into half-open date windows."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..errors import InvalidPeriodError

DASHBOARD_PERIODS = ("thisMonth", "lastMonth", "thisYear")
BUDGET_CYCLES = ("weekly", "monthly", "yearly")


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Half-open range ``[start, end)``."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


def month_start(moment: datetime) -> datetime:
    """Return midnight on the first day of ``moment``'s month."""

    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def add_months(moment: datetime, months: int) -> datetime:
    """Shift ``moment`` by whole calendar months, clamping to the month's last day."""

    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def resolve_period(token: str, now: datetime) -> DateWindow:
    """Map a dashboard period token to a concrete window around ``now``.

    Raises:
        InvalidPeriodError: for tokens other than thisMonth, lastMonth, thisYear.
    """

    current = month_start(now)
    if token == "thisMonth":
        return DateWindow(current, add_months(current, 1))
    if token == "lastMonth":
        return DateWindow(add_months(current, -1), current)
    if token == "thisYear":
        return DateWindow(current.replace(month=1), now)
    raise InvalidPeriodError(token)


def budget_window(period: str, start_date: datetime) -> DateWindow:
    """Return one budget cycle starting at the budget's own ``start_date``."""

    if period == "weekly":
        end = start_date + timedelta(days=7)
    elif period == "monthly":
        end = add_months(start_date, 1)
    elif period == "yearly":
        end = add_months(start_date, 12)
    else:
        raise InvalidPeriodError(period)
    return DateWindow(start_date, end)


def trailing_months_window(months: int, now: datetime) -> DateWindow:
    """Window covering ``months`` calendar months, the current one included."""

    if isinstance(months, bool) or not isinstance(months, int) or months < 1:
        raise InvalidPeriodError(months)
    current = month_start(now)
    return DateWindow(add_months(current, -(months - 1)), add_months(current, 1))


def month_key(moment: datetime) -> str:
    return moment.strftime("%Y-%m")


def month_keys(window: DateWindow) -> list[str]:
    """Enumerate ``YYYY-MM`` keys for every calendar month touched by ``window``."""

    keys: list[str] = []
    cursor = month_start(window.start)
    while cursor < window.end:
        keys.append(month_key(cursor))
        cursor = add_months(cursor, 1)
    return keys
