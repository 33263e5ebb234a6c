"""Text and plain-equality comparison."""

from __future__ import annotations

import re
from typing import Any

from ..comparator import Comparator
from ..operators import FieldType, Operator
from ..utils import to_text


class TextComparator(Comparator):
    """
    ``==``/``!=`` are case-sensitive; ``contains``, ``not_contains``,
    ``starts_with`` and ``ends_with`` ignore case.  An invalid ``regex``
    pattern never matches.
    """

    field_types = (FieldType.TEXT, FieldType.TEXT_UNIT)

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        expected = to_text(user_value)
        actual = to_text(actual_value)

        if operator == Operator.EQ:
            return actual == expected
        if operator == Operator.NE:
            return actual != expected
        if operator == Operator.CONTAINS:
            return expected.lower() in actual.lower()
        if operator == Operator.NOT_CONTAINS:
            return expected.lower() not in actual.lower()
        if operator == Operator.STARTS_WITH:
            return actual.lower().startswith(expected.lower())
        if operator == Operator.ENDS_WITH:
            return actual.lower().endswith(expected.lower())
        if operator == Operator.EMPTY:
            return _is_empty(actual)
        if operator == Operator.NOT_EMPTY:
            return not _is_empty(actual)
        if operator == Operator.REGEX:
            return _regex_search(expected, actual)
        return False


class EqualityComparator(Comparator):
    """Single-value select: string-coerced ``==`` / ``!=`` only."""

    field_types = (FieldType.SELECT,)
    multiple = False

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        if operator == Operator.EQ:
            return to_text(actual_value) == to_text(user_value)
        if operator == Operator.NE:
            return to_text(actual_value) != to_text(user_value)
        return False


def _is_empty(text: str) -> bool:
    # "0" counts as empty
    return text in ("", "0")


def _regex_search(pattern: str, text: str) -> bool:
    """
    Search *text* with *pattern*.

    Delimited patterns (``/abc/i``) are accepted; the ``i``, ``m``, ``s``
    and ``x`` flags are honoured.
    """
    flags = 0
    delimited = re.fullmatch(r"/(.*)/([imsx]*)", pattern, re.DOTALL)
    if delimited:
        pattern = delimited.group(1)
        for flag in delimited.group(2):
            flags |= {
                "i": re.IGNORECASE,
                "m": re.MULTILINE,
                "s": re.DOTALL,
                "x": re.VERBOSE,
            }[flag]
    try:
        return re.search(pattern, text, flags) is not None
    except re.error:
        return False
