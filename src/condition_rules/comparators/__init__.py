"""
Built-in comparison strategies.

Provides one Comparator subclass per semantic family and a factory
function to create registries.

Usage::

    from condition_rules.comparators import build_default_comparators

    comparators = build_default_comparators()
    comparators.compare(FieldType.NUMBER, False, ">=", 100, 120)
"""

from __future__ import annotations

from ..comparator import ComparatorRegistry
from .address import EmailComparator
from .boolean import BooleanComparator
from .collection import CollectionComparator
from .network import IpComparator
from .numeric import NumericComparator
from .tags import TagsComparator
from .temporal import DateComparator, TimeComparator
from .text import EqualityComparator, TextComparator


def build_default_comparators() -> ComparatorRegistry:
    """
    Create a registry with all built-in strategies.

    Returns a fresh ComparatorRegistry; the collection strategy is
    registered before the single-select equality strategy so that a
    non-multiple select collapses to plain equality.
    """
    registry = ComparatorRegistry()
    registry.register_all(
        NumericComparator(),
        TextComparator(),
        BooleanComparator(),
        DateComparator(),
        TimeComparator(),
        CollectionComparator(),
        EqualityComparator(),
        TagsComparator(),
        IpComparator(),
        EmailComparator(),
    )
    return registry


__all__ = [
    "BooleanComparator",
    "CollectionComparator",
    "ComparatorRegistry",
    "DateComparator",
    "EmailComparator",
    "EqualityComparator",
    "IpComparator",
    "NumericComparator",
    "TagsComparator",
    "TextComparator",
    "TimeComparator",
    "build_default_comparators",
]
