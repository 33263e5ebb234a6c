"""Collection membership: any, none, all (plus ==/!= aliases)."""

from __future__ import annotations

from typing import Any

from ..comparator import Comparator
from ..operators import FieldType, Operator
from ..utils import to_identifier_set


class CollectionComparator(Comparator):
    """
    Both sides are treated as sets of string identifiers.

    ``any`` (or ``==``) needs a non-empty intersection, ``none`` (or
    ``!=``) an empty one, and ``all`` needs every configured identifier
    to be present in the actual value.
    """

    field_types = (
        FieldType.SELECT,
        FieldType.POST,
        FieldType.TERM,
        FieldType.USER,
        FieldType.AJAX,
    )

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        expected = to_identifier_set(user_value)
        actual = to_identifier_set(actual_value)

        if operator in (Operator.ANY, Operator.EQ):
            return not expected.isdisjoint(actual)
        if operator in (Operator.NONE, Operator.NE):
            return expected.isdisjoint(actual)
        if operator == Operator.ALL:
            return expected.issubset(actual)
        return False
