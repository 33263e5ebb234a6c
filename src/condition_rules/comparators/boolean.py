"""Boolean comparison: yes, no."""

from __future__ import annotations

from typing import Any

from ..comparator import Comparator
from ..operators import FieldType, Operator
from ..utils import to_bool


class BooleanComparator(Comparator):
    """Only the actual value matters; the user value is ignored."""

    field_types = (FieldType.BOOLEAN,)

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        if operator == Operator.YES:
            return to_bool(actual_value)
        if operator == Operator.NO:
            return not to_bool(actual_value)
        return False
