"""
Comparison strategy interface and registry.

Provides the Comparator protocol and a registry that maps a condition's
``(FieldType, multiple)`` pair, or an operator token with its own
routing, to the strategy that evaluates it.

New strategies are added by subclassing Comparator and registering
via ``register()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from .operators import FieldType, Operator

if TYPE_CHECKING:
    from collections.abc import Iterable


class Comparator(ABC):
    """
    Strategy interface for comparing a user value against an actual value.

    Subclasses declare the field types they handle.  ``multiple`` narrows
    the registration to one multiplicity (``None`` registers both), and
    ``routed_operators`` claims tokens that must reach this strategy
    whatever the condition's type.
    """

    field_types: ClassVar[tuple[FieldType, ...]] = ()
    multiple: ClassVar[bool | None] = None
    routed_operators: ClassVar[tuple[Operator, ...]] = ()

    @abstractmethod
    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        """
        Evaluate ``actual_value <operator> user_value``.

        Args:
            operator: The operator token from the rule.
            user_value: The value configured by the rule author.
            actual_value: The value resolved from the evaluation context.

        Returns:
            True if the rule is satisfied.  Unknown operators return False.
        """
        ...


class ComparatorRegistry:
    """
    Lookup table of Comparator instances.

    Usage::

        registry = ComparatorRegistry()
        registry.register(NumericComparator())

        registry.compare(FieldType.NUMBER, False, ">=", 100, 120.5)
    """

    def __init__(self) -> None:
        self._by_type: dict[tuple[FieldType, bool], Comparator] = {}
        self._by_operator: dict[str, Comparator] = {}

    # -- registration --------------------------------------------------------

    def register(self, comparator: Comparator) -> None:
        """Register a strategy for its declared types and routed operators."""
        multiplicities = (
            (False, True) if comparator.multiple is None else (comparator.multiple,)
        )
        for field_type in comparator.field_types:
            for multiple in multiplicities:
                self._by_type[(field_type, multiple)] = comparator
        for operator in comparator.routed_operators:
            self._by_operator[operator.value] = comparator

    def register_all(self, *comparators: Comparator) -> None:
        """Register multiple strategies at once."""
        for comparator in comparators:
            self.register(comparator)

    # -- look-up -------------------------------------------------------------

    def get(
        self, field_type: FieldType | str, multiple: bool = False, operator: str = ""
    ) -> Comparator | None:
        """Return the strategy for an operator route or type, or ``None``."""
        routed = self._by_operator.get(operator)
        if routed is not None:
            return routed
        try:
            field_type = FieldType(field_type)
        except ValueError:
            return None
        return self._by_type.get((field_type, bool(multiple)))

    @property
    def supported_types(self) -> set[FieldType]:
        return {field_type for field_type, _ in self._by_type}

    def routed_operators(self) -> Iterable[str]:
        return self._by_operator.keys()

    # -- evaluation shortcut -------------------------------------------------

    def compare(
        self,
        field_type: FieldType | str,
        multiple: bool,
        operator: str,
        user_value: Any,
        actual_value: Any,
    ) -> bool:
        """
        Look up the strategy and compare.

        A type without a registered strategy never matches.
        """
        comparator = self.get(field_type, multiple, operator)
        if comparator is None:
            return False
        return comparator.compare(operator, user_value, actual_value)
