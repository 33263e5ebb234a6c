"""
Time period units for ``number_unit`` conditions.

Value providers for conditions such as "orders in the last N days" read
the decomposed ``_unit`` and ``_number`` context keys and use these
helpers to turn them into seconds or a date range.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .utils import parse_instant

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY

_MULTIPLIERS = {
    "minute": MINUTE,
    "minutes": MINUTE,
    "hour": HOUR,
    "hours": HOUR,
    "day": DAY,
    "days": DAY,
    "week": WEEK,
    "weeks": WEEK,
    "month": MONTH,
    "months": MONTH,
    "year": YEAR,
    "years": YEAR,
}

PERIOD_UNITS: tuple[str, ...] = ("hour", "day", "week", "month", "year")
AGE_UNITS: tuple[str, ...] = ("day", "week", "month", "year")


def multiplier(unit: str | None) -> int:
    """Seconds per *unit*; unknown units count as days."""
    return _MULTIPLIERS.get((unit or "").lower(), DAY)


def to_seconds(unit: str | None, amount: Any) -> int:
    """Absolute number of seconds in ``amount`` units."""
    try:
        count = abs(int(float(amount)))
    except (TypeError, ValueError):
        count = 0
    return count * multiplier(unit)


def from_seconds(seconds: int, unit: str | None) -> int:
    """Whole *unit* count in *seconds*, rounded down."""
    return int(seconds // multiplier(unit))


def date_range(
    unit: str | None, amount: Any, now: datetime.datetime | None = None
) -> tuple[datetime.datetime, datetime.datetime]:
    """``(start, end)`` covering the last ``amount`` units up to *now*."""
    end = now or datetime.datetime.now()
    return end - datetime.timedelta(seconds=to_seconds(unit, amount)), end


def age(
    value: Any, unit: str | None = "day", now: Any = None
) -> int:
    """
    Whole units elapsed since *value*.

    Unparseable or future instants have an age of 0.
    """
    instant = parse_instant(value)
    if instant is None:
        return 0
    current = parse_instant(now) if now is not None else datetime.datetime.now()
    if current is None:
        return 0
    elapsed = int((current - instant).total_seconds())
    if elapsed < 0:
        return 0
    return from_seconds(elapsed, unit)


@dataclass(frozen=True, slots=True)
class AgeValue:
    """
    Value provider: whole units elapsed since the instant under ``key``.

    The unit comes from the rule's ``{unit, number}`` value, exposed as
    ``_unit`` in the context; ``context["now"]`` overrides the clock.
    """

    key: str

    def evaluate(self, context: Mapping[str, Any]) -> int:
        return age(context.get(self.key), context.get("_unit"), context.get("now"))
