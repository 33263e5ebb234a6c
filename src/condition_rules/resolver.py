"""
Value resolution: turns a rule's user value and the evaluation context
into the ``(user_value, actual_value)`` pair handed to a comparator.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .operators import FieldType

if TYPE_CHECKING:
    from .definitions import ConditionDefinition

UNIT_KEY = "_unit"
NUMBER_KEY = "_number"
TEXT_KEY = "_text"

# composite type -> (scalar part of the user value, context key it is exposed as)
_COMPOSITE_PARTS: dict[FieldType, tuple[str, str]] = {
    FieldType.NUMBER_UNIT: ("number", NUMBER_KEY),
    FieldType.TEXT_UNIT: ("text", TEXT_KEY),
}


@dataclass(frozen=True, slots=True)
class Resolution:
    """A resolved rule, ready for comparison.

    Attributes:
        user_value: The scalar the comparator receives as the user value.
        actual_value: The value produced by the condition's provider.
        context: The context the provider saw, including any decomposed
            ``_unit`` / ``_number`` / ``_text`` entries.
    """

    user_value: Any
    actual_value: Any
    context: Mapping[str, Any]


class ValueResolver:
    """Resolves compare values without mutating the caller's context."""

    def resolve(
        self,
        definition: ConditionDefinition,
        context: Mapping[str, Any],
        user_value: Any,
    ) -> Resolution | None:
        """
        Resolve one rule.

        Returns ``None`` when a required context key is missing; the
        provider is not invoked in that case.
        """
        if definition.missing_keys(context):
            return None

        user_value, context = self.decompose(definition, context, user_value)
        actual_value = definition.actual_value(context)
        return Resolution(user_value, actual_value, context)

    @staticmethod
    def decompose(
        definition: ConditionDefinition,
        context: Mapping[str, Any],
        user_value: Any,
    ) -> tuple[Any, Mapping[str, Any]]:
        """
        Split a ``{unit, number}`` / ``{unit, text}`` user value.

        Returns the scalar part and a copy of *context* carrying the unit
        and scalar under the reserved keys.  Other values pass through
        with the original context.
        """
        parts = _COMPOSITE_PARTS.get(definition.type)
        if parts is None or not isinstance(user_value, Mapping):
            return user_value, context

        part, key = parts
        scalar = user_value.get(part)
        augmented = {**context, UNIT_KEY: user_value.get("unit"), key: scalar}
        return scalar, augmented
