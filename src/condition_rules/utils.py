"""
Coercion helpers shared by the comparison strategies.

Every helper is total: malformed input coerces to a safe default
(``0.0``, ``""``, ``False`` or ``None``) instead of raising.
"""

from __future__ import annotations

import datetime
import math
import re
from collections.abc import Mapping
from typing import Any

# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

_LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

_TRUE_STRINGS = frozenset({"1", "true", "on", "yes"})


def to_float(value: Any) -> float:
    """
    Coerce *value* to ``float``.

    Strings with a numeric prefix use that prefix (``"12abc"`` → ``12.0``);
    anything else non-numeric becomes ``0.0``.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int | float):
        try:
            result = float(value)
        except OverflowError:
            return 0.0
        return result if math.isfinite(result) else 0.0
    if value is None:
        return 0.0
    text = str(value)
    try:
        result = float(text)
    except ValueError:
        match = _LEADING_NUMBER_RE.match(text)
        if not match:
            return 0.0
        result = float(match.group(0))
    return result if math.isfinite(result) else 0.0


def to_text(value: Any) -> str:
    """
    Coerce *value* to ``str``.

    ``None`` and ``False`` become ``""``, ``True`` becomes ``"1"`` and
    integral floats drop their fractional part (``5.0`` → ``"5"``).
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_bool(value: Any) -> bool:
    """True only for ``True``, ``1``, ``1.0`` and the strings 1/true/on/yes."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return to_text(value).strip().lower() in _TRUE_STRINGS


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------


def parse_list_value(value: Any) -> list[Any]:
    """
    Parse a value into a list.

    Supports:
    - Python collections (list, tuple, set, frozenset)
    - Comma- or newline-separated strings: ``"val1, val2"``
    - ``None`` → ``[]``; any other scalar → ``[value]``
    """
    if value is None:
        return []
    if isinstance(value, list | tuple | set | frozenset):
        return list(value)
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, str):
        return re.split(r"[,\n]", value)
    return [value]


def to_patterns(value: Any) -> list[str]:
    """Trimmed, non-empty string patterns from a list or separated string."""
    patterns = (to_text(item).strip() for item in parse_list_value(value))
    return [p for p in patterns if p]


def to_identifier_set(value: Any) -> set[str]:
    """Treat *value* as a set of trimmed, non-empty string identifiers."""
    return set(to_patterns(value))


# ---------------------------------------------------------------------------
# Date / time
# ---------------------------------------------------------------------------

_RELATIVE_DAYS = {"today": 0, "yesterday": -1, "tomorrow": 1}

_TIME_FORMATS = ("%I:%M %p", "%I:%M%p", "%I:%M:%S %p", "%I %p", "%I%p")


def _wall_clock(value: datetime.datetime) -> datetime.datetime:
    # aware values keep their own calendar day and clock time
    return value.replace(tzinfo=None)


def parse_instant(
    value: Any, now: datetime.datetime | None = None
) -> datetime.datetime | None:
    """
    Parse *value* into a naive local ``datetime``.

    Accepts ``datetime``/``date`` objects, epoch seconds, ISO-8601 strings
    (a trailing ``Z`` is allowed) and the keywords ``now``, ``today``,
    ``yesterday`` and ``tomorrow``.  Returns ``None`` when unparseable.

    Epoch seconds and the keywords resolve in local time.  An aware
    ``datetime`` keeps its own wall clock, so ``2024-01-05T22:00-05:00``
    is still the evening of January 5th.
    """
    if isinstance(value, datetime.datetime):
        return _wall_clock(value)
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        try:
            return datetime.datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError):
            return None

    text = str(value).strip()
    if not text:
        return None

    keyword = text.lower()
    if keyword == "now" or keyword in _RELATIVE_DAYS:
        current = _wall_clock(now) if now else datetime.datetime.now()
        if keyword == "now":
            return current
        day = current.date() + datetime.timedelta(days=_RELATIVE_DAYS[keyword])
        return datetime.datetime.combine(day, datetime.time())

    try:
        return _wall_clock(datetime.datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        return None


def parse_time_of_day(value: Any) -> datetime.time | None:
    """
    Parse *value* into a naive ``time``.

    Accepts ``time``/``datetime`` objects, ``HH:MM[:SS]`` and 12-hour
    clock strings such as ``"2:30 pm"``.  Returns ``None`` when unparseable.
    """
    if isinstance(value, datetime.datetime):
        return value.time().replace(tzinfo=None)
    if isinstance(value, datetime.time):
        return value.replace(tzinfo=None)
    if value is None or isinstance(value, bool):
        return None

    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.time.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        pass
    upper = text.upper()
    for fmt in _TIME_FORMATS:
        try:
            return datetime.datetime.strptime(upper, fmt).time()
        except ValueError:
            continue
    return None
