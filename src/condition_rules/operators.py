"""
Operator and field-type vocabulary.

The token values below are the wire contract shared with whatever UI
authors the rules; they must never change.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class Operator(str, Enum):
    """Supported rule operators."""

    # Equality / ordering
    EQ = "=="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    # Text
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"
    REGEX = "regex"

    # Boolean
    YES = "yes"
    NO = "no"

    # Collection membership
    ANY = "any"
    NONE = "none"
    ALL = "all"

    # Tag patterns
    ANY_EXACT = "any_exact"
    NONE_EXACT = "none_exact"
    ANY_CONTAINS = "any_contains"
    NONE_CONTAINS = "none_contains"
    ANY_STARTS = "any_starts"
    NONE_STARTS = "none_starts"
    ANY_ENDS = "any_ends"
    NONE_ENDS = "none_ends"

    # Network / address patterns
    IP_MATCH = "ip_match"
    IP_NOT_MATCH = "ip_not_match"
    EMAIL_MATCH = "email_match"
    EMAIL_NOT_MATCH = "email_not_match"


class FieldType(str, Enum):
    """Semantic type of a condition; selects the comparison strategy."""

    TEXT = "text"
    TEXT_UNIT = "text_unit"
    NUMBER = "number"
    NUMBER_UNIT = "number_unit"
    BOOLEAN = "boolean"
    DATE = "date"
    TIME = "time"
    IP = "ip"
    EMAIL = "email"
    TAGS = "tags"
    SELECT = "select"
    POST = "post"
    TERM = "term"
    USER = "user"
    AJAX = "ajax"


# Object pickers always compare as collections regardless of multiplicity.
OBJECT_TYPES: frozenset[FieldType] = frozenset(
    {FieldType.POST, FieldType.TERM, FieldType.USER, FieldType.AJAX}
)

# Types whose user value may arrive as a ``{unit, number|text}`` pair.
COMPOSITE_TYPES: frozenset[FieldType] = frozenset(
    {FieldType.NUMBER_UNIT, FieldType.TEXT_UNIT}
)


def _labels(pairs: dict[Operator, str]) -> Mapping[str, str]:
    return MappingProxyType({op.value: label for op, label in pairs.items()})


# ---------------------------------------------------------------------------
# Operator label families
# ---------------------------------------------------------------------------

EQUALITY = _labels({Operator.EQ: "Is", Operator.NE: "Is not"})

NUMERIC = _labels(
    {
        Operator.EQ: "Equal to",
        Operator.NE: "Not equal to",
        Operator.GT: "Greater than",
        Operator.LT: "Less than",
        Operator.GE: "Greater than or equal to",
        Operator.LE: "Less than or equal to",
    }
)

BOOLEAN = _labels({Operator.YES: "Yes", Operator.NO: "No"})

TEXT = _labels(
    {
        Operator.EQ: "Equals",
        Operator.NE: "Does not equal",
        Operator.CONTAINS: "Contains",
        Operator.NOT_CONTAINS: "Does not contain",
        Operator.STARTS_WITH: "Starts with",
        Operator.ENDS_WITH: "Ends with",
        Operator.EMPTY: "Is empty",
        Operator.NOT_EMPTY: "Is not empty",
    }
)

TEXT_ADVANCED = MappingProxyType(
    {**TEXT, Operator.REGEX.value: "Matches pattern"}
)

COLLECTION = _labels(
    {
        Operator.ANY: "Is any of",
        Operator.NONE: "Is none of",
        Operator.ALL: "Is all of",
    }
)

COLLECTION_ANY_NONE = _labels({Operator.ANY: "Is any of", Operator.NONE: "Is none of"})

DATE = _labels(
    {
        Operator.EQ: "Is",
        Operator.NE: "Is not",
        Operator.GT: "Is after",
        Operator.LT: "Is before",
        Operator.GE: "Is on or after",
        Operator.LE: "Is on or before",
    }
)

TIME = _labels(
    {
        Operator.EQ: "Is",
        Operator.NE: "Is not",
        Operator.GT: "Is after",
        Operator.LT: "Is before",
        Operator.GE: "Is at or after",
        Operator.LE: "Is at or before",
    }
)

IP = _labels({Operator.IP_MATCH: "Matches", Operator.IP_NOT_MATCH: "Does not match"})

EMAIL = _labels(
    {Operator.EMAIL_MATCH: "Matches", Operator.EMAIL_NOT_MATCH: "Does not match"}
)

TAGS = _labels(
    {
        Operator.ANY_EXACT: "Is any of",
        Operator.NONE_EXACT: "Is none of",
        Operator.ANY_CONTAINS: "Contains any of",
        Operator.NONE_CONTAINS: "Contains none of",
        Operator.ANY_STARTS: "Starts with any of",
        Operator.NONE_STARTS: "Starts with none of",
        Operator.ANY_ENDS: "Ends with any of",
        Operator.NONE_ENDS: "Ends with none of",
    }
)

TAGS_ENDS = _labels(
    {Operator.ANY_ENDS: "Ends with any of", Operator.NONE_ENDS: "Ends with none of"}
)

CONTAINS = _labels({Operator.EQ: "Contains", Operator.NE: "Does not contain"})

_BY_TYPE: dict[FieldType, Mapping[str, str]] = {
    FieldType.NUMBER: NUMERIC,
    FieldType.NUMBER_UNIT: NUMERIC,
    FieldType.TEXT: TEXT,
    FieldType.TEXT_UNIT: TEXT,
    FieldType.BOOLEAN: BOOLEAN,
    FieldType.DATE: DATE,
    FieldType.TIME: TIME,
    FieldType.IP: IP,
    FieldType.EMAIL: EMAIL,
    FieldType.TAGS: TAGS,
}


def operators_for_type(
    field_type: FieldType | str, multiple: bool = False
) -> Mapping[str, str]:
    """
    Return the default ``token -> label`` operators for a field type.

    Select and object-picker types offer collection operators when
    ``multiple`` is set and plain equality otherwise.
    """
    field_type = FieldType(field_type)
    if field_type is FieldType.SELECT or field_type in OBJECT_TYPES:
        return COLLECTION if multiple else EQUALITY
    return _BY_TYPE[field_type]


def all_operator_groups() -> dict[str, Mapping[str, str]]:
    """All operator families keyed by group name, for authoring front-ends."""
    return {
        "text": TEXT,
        "text_advanced": TEXT_ADVANCED,
        "text_unit": TEXT,
        "number": NUMERIC,
        "number_unit": NUMERIC,
        "boolean": BOOLEAN,
        "date": DATE,
        "time": TIME,
        "ip": IP,
        "email": EMAIL,
        "tags": TAGS,
        "tags_ends": TAGS_ENDS,
        "equality": EQUALITY,
        "contains": CONTAINS,
        "collection": COLLECTION,
        "collection_basic": COLLECTION_ANY_NONE,
    }


VALID_OPERATORS: frozenset[str] = frozenset(op.value for op in Operator)
