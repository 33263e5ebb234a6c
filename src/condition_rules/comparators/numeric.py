"""Numeric comparison: ==, !=, >, <, >=, <=."""

from __future__ import annotations

import operator as _op
from typing import Any

from ..comparator import Comparator
from ..operators import FieldType, Operator
from ..utils import to_float

_ORDERING = {
    Operator.EQ.value: _op.eq,
    Operator.NE.value: _op.ne,
    Operator.GT.value: _op.gt,
    Operator.LT.value: _op.lt,
    Operator.GE.value: _op.ge,
    Operator.LE.value: _op.le,
}


class NumericComparator(Comparator):
    """Both sides are coerced to float; non-numeric input counts as 0."""

    field_types = (FieldType.NUMBER, FieldType.NUMBER_UNIT)

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        func = _ORDERING.get(operator)
        if func is None:
            return False
        return bool(func(to_float(actual_value), to_float(user_value)))
