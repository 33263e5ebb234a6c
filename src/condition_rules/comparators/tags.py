"""Tag-pattern comparison: any_/none_ × exact, contains, starts, ends."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..comparator import Comparator
from ..operators import FieldType, Operator
from ..utils import to_patterns, to_text

_MODES: dict[str, Callable[[str, str], bool]] = {
    "exact": lambda actual, pattern: actual == pattern,
    "contains": lambda actual, pattern: pattern.lower() in actual.lower(),
    "starts": lambda actual, pattern: actual.lower().startswith(pattern.lower()),
    "ends": lambda actual, pattern: actual.lower().endswith(pattern.lower()),
}

# token -> (want_match, mode); bare any/none are the legacy spelling of *_ends
_OPERATORS: dict[str, tuple[bool, str]] = {
    Operator.ANY_EXACT.value: (True, "exact"),
    Operator.NONE_EXACT.value: (False, "exact"),
    Operator.ANY_CONTAINS.value: (True, "contains"),
    Operator.NONE_CONTAINS.value: (False, "contains"),
    Operator.ANY_STARTS.value: (True, "starts"),
    Operator.NONE_STARTS.value: (False, "starts"),
    Operator.ANY_ENDS.value: (True, "ends"),
    Operator.NONE_ENDS.value: (False, "ends"),
    Operator.ANY.value: (True, "ends"),
    Operator.NONE.value: (False, "ends"),
}


class TagsComparator(Comparator):
    """
    The user value is a list of patterns and the actual value one string.

    ``any_*`` is true when the actual string satisfies the mode against at
    least one pattern, ``none_*`` when it satisfies none.  Exact matching
    is case-sensitive; the other modes ignore case.  Blank patterns are
    ignored.
    """

    field_types = (FieldType.TAGS,)

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        entry = _OPERATORS.get(operator)
        if entry is None:
            return False
        want_match, mode = entry
        matches = _MODES[mode]
        actual = to_text(actual_value).strip()
        matched = any(matches(actual, pattern) for pattern in to_patterns(user_value))
        return matched if want_match else not matched
