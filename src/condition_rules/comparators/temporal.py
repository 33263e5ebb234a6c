"""Date and time-of-day comparison: ==, !=, >, <, >=, <=."""

from __future__ import annotations

import datetime
import operator as _op
from typing import Any

from ..comparator import Comparator
from ..operators import FieldType, Operator
from ..utils import parse_instant, parse_time_of_day

_ORDERING = {
    Operator.EQ.value: _op.eq,
    Operator.NE.value: _op.ne,
    Operator.GT.value: _op.gt,
    Operator.LT.value: _op.lt,
    Operator.GE.value: _op.ge,
    Operator.LE.value: _op.le,
}


class DateComparator(Comparator):
    """Both sides are truncated to the calendar day before comparing."""

    field_types = (FieldType.DATE,)

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        func = _ORDERING.get(operator)
        if func is None:
            return False
        expected = parse_instant(user_value)
        actual = parse_instant(actual_value)
        if expected is None or actual is None:
            return False
        return bool(func(actual.date(), expected.date()))


class TimeComparator(Comparator):
    """Both sides are truncated to the minute before comparing."""

    field_types = (FieldType.TIME,)

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        func = _ORDERING.get(operator)
        if func is None:
            return False
        expected = _to_minute(parse_time_of_day(user_value))
        actual = _to_minute(parse_time_of_day(actual_value))
        if expected is None or actual is None:
            return False
        return bool(func(actual, expected))


def _to_minute(value: datetime.time | None) -> int | None:
    if value is None:
        return None
    return value.hour * 60 + value.minute
