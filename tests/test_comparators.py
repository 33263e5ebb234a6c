"""Tests for the built-in comparison strategies and the comparator registry."""

from __future__ import annotations

import datetime
from typing import Any

import pytest

from condition_rules.comparator import Comparator, ComparatorRegistry
from condition_rules.comparators import (
    BooleanComparator,
    CollectionComparator,
    DateComparator,
    EmailComparator,
    EqualityComparator,
    IpComparator,
    NumericComparator,
    TagsComparator,
    TextComparator,
    TimeComparator,
)
from condition_rules.comparators.address import email_matches, split_address
from condition_rules.comparators.network import ip_matches
from condition_rules.operators import FieldType

# ══════════════════════════════════════════════════════════════════════
# Numeric
# ══════════════════════════════════════════════════════════════════════


class TestNumericComparator:
    """Ordering comparisons on float-coerced values."""

    @pytest.mark.parametrize(
        ("operator", "user", "actual", "expected"),
        [
            ("==", 5, 5.0, True),
            ("!=", 5, 6, True),
            (">", 100, 120.5, True),
            ("<", 100, 120.5, False),
            (">=", "100", 100, True),
            ("<=", 99, "100", False),
        ],
    )
    def test_ordering(self, operator, user, actual, expected) -> None:
        assert NumericComparator().compare(operator, user, actual) is expected

    def test_non_numeric_counts_as_zero(self) -> None:
        """Garbage input coerces to 0 instead of raising."""
        op = NumericComparator()
        assert op.compare("==", 0, "abc") is True
        assert op.compare("==", 12, "12abc") is True

    def test_huge_integer_does_not_raise(self) -> None:
        op = NumericComparator()
        assert op.compare(">", 10, 10**400) is False
        assert op.compare("==", 0, 10**400) is True

    def test_unknown_operator_is_false(self) -> None:
        assert NumericComparator().compare("contains", 1, 1) is False


# ══════════════════════════════════════════════════════════════════════
# Text
# ══════════════════════════════════════════════════════════════════════


class TestTextComparator:
    """Text operators: equality is case-sensitive, the rest are not."""

    def test_equality_is_case_sensitive(self) -> None:
        op = TextComparator()
        assert op.compare("==", "Hello", "Hello") is True
        assert op.compare("==", "hello", "Hello") is False
        assert op.compare("!=", "hello", "Hello") is True

    def test_substring_operators_ignore_case(self) -> None:
        op = TextComparator()
        assert op.compare("contains", "WORLD", "hello world") is True
        assert op.compare("not_contains", "moon", "hello world") is True
        assert op.compare("starts_with", "HEL", "hello") is True
        assert op.compare("ends_with", "LO", "hello") is True

    def test_empty_treats_zero_as_empty(self) -> None:
        op = TextComparator()
        assert op.compare("empty", None, "") is True
        assert op.compare("empty", None, "0") is True
        assert op.compare("empty", None, None) is True
        assert op.compare("not_empty", None, "x") is True

    def test_regex(self) -> None:
        op = TextComparator()
        assert op.compare("regex", r"^\d{3}$", "123") is True
        assert op.compare("regex", "/^abc/i", "ABCdef") is True
        assert op.compare("regex", "/^abc/", "ABCdef") is False

    def test_invalid_regex_never_matches(self) -> None:
        assert TextComparator().compare("regex", "([", "anything") is False

    def test_integral_float_compares_as_integer_text(self) -> None:
        assert TextComparator().compare("==", "5", 5.0) is True


class TestEqualityComparator:
    """Single-value select equality."""

    def test_string_coerced_equality(self) -> None:
        op = EqualityComparator()
        assert op.compare("==", "3", 3) is True
        assert op.compare("!=", "3", 4) is True

    def test_collection_operator_is_false(self) -> None:
        assert EqualityComparator().compare("any", ["a"], "a") is False


# ══════════════════════════════════════════════════════════════════════
# Boolean
# ══════════════════════════════════════════════════════════════════════


class TestBooleanComparator:
    @pytest.mark.parametrize("actual", [True, 1, "1", "true", "On", "yes"])
    def test_truthy_values(self, actual: Any) -> None:
        op = BooleanComparator()
        assert op.compare("yes", None, actual) is True
        assert op.compare("no", None, actual) is False

    @pytest.mark.parametrize("actual", [False, 0, "0", "", None, "nope"])
    def test_falsy_values(self, actual: Any) -> None:
        op = BooleanComparator()
        assert op.compare("yes", None, actual) is False
        assert op.compare("no", None, actual) is True


# ══════════════════════════════════════════════════════════════════════
# Date / time
# ══════════════════════════════════════════════════════════════════════


class TestDateComparator:
    """Dates compare at day granularity."""

    def test_same_day_is_equal_regardless_of_time(self) -> None:
        assert DateComparator().compare("==", "2024-03-04", "2024-03-04T18:00:00")

    def test_ordering(self) -> None:
        op = DateComparator()
        assert op.compare(">", "2024-03-01", "2024-03-04") is True
        assert op.compare("<=", "2024-03-04", datetime.date(2024, 3, 4)) is True
        assert op.compare("<", "2024-03-01", "2024-03-04") is False

    def test_aware_value_compares_on_its_own_calendar_day(self) -> None:
        op = DateComparator()
        assert op.compare("==", "2024-01-05", "2024-01-05T22:00-05:00") is True
        assert op.compare("==", "2024-01-05", "2024-01-05T00:30+09:00") is True

    def test_unparseable_is_false(self) -> None:
        op = DateComparator()
        assert op.compare("==", "not a date", "2024-03-04") is False
        assert op.compare("!=", "2024-03-04", None) is False


class TestTimeComparator:
    """Times compare at minute granularity."""

    def test_seconds_are_ignored(self) -> None:
        assert TimeComparator().compare("==", "14:30", "14:30:59") is True

    def test_twelve_hour_clock(self) -> None:
        op = TimeComparator()
        assert op.compare(">=", "09:00", "9:30 am") is True
        assert op.compare("<", "2:00 PM", "13:59") is True

    def test_unparseable_is_false(self) -> None:
        assert TimeComparator().compare("==", "noonish", "12:00") is False


# ══════════════════════════════════════════════════════════════════════
# Collection
# ══════════════════════════════════════════════════════════════════════


class TestCollectionComparator:
    """Set semantics for any / none / all."""

    def test_any_and_none(self) -> None:
        op = CollectionComparator()
        assert op.compare("any", [1, 2, 3], [5, 2]) is True
        assert op.compare("none", [1, 2, 3], [5, 2]) is False

    def test_all_is_subset(self) -> None:
        op = CollectionComparator()
        assert op.compare("all", [1, 2], [1, 2, 3]) is True
        assert op.compare("all", [1, 2, 4], [1, 2, 3]) is False

    def test_scalar_actual_value(self) -> None:
        assert CollectionComparator().compare("any", ["admin", "editor"], "editor")

    def test_separated_string_is_trimmed(self) -> None:
        assert CollectionComparator().compare("all", "a, b", ["b", "a"]) is True

    def test_equality_aliases(self) -> None:
        op = CollectionComparator()
        assert op.compare("==", [7], [7, 8]) is True
        assert op.compare("!=", [7], [8]) is True


# ══════════════════════════════════════════════════════════════════════
# Tags
# ══════════════════════════════════════════════════════════════════════


class TestTagsComparator:
    def test_any_ends(self) -> None:
        op = TagsComparator()
        patterns = ["@gmail.com", "@yahoo.com"]
        assert op.compare("any_ends", patterns, "joe@gmail.com") is True
        assert op.compare("any_ends", patterns, "joe@outlook.com") is False
        assert op.compare("none_ends", patterns, "joe@outlook.com") is True

    def test_exact_is_case_sensitive(self) -> None:
        op = TagsComparator()
        assert op.compare("any_exact", ["VIP"], "VIP") is True
        assert op.compare("any_exact", ["VIP"], "vip") is False
        assert op.compare("none_exact", ["VIP"], "vip") is True

    def test_contains_and_starts_ignore_case(self) -> None:
        op = TagsComparator()
        assert op.compare("any_contains", ["VIP"], "is-vip-user") is True
        assert op.compare("none_starts", ["temp"], "TEMPORARY") is False

    def test_legacy_any_means_ends(self) -> None:
        op = TagsComparator()
        assert op.compare("any", ".edu", "student@uni.edu") is True
        assert op.compare("none", ".edu", "student@uni.edu") is False

    def test_blank_patterns_are_ignored(self) -> None:
        assert TagsComparator().compare("any_contains", ["", "  "], "abc") is False


# ══════════════════════════════════════════════════════════════════════
# IP
# ══════════════════════════════════════════════════════════════════════


class TestIpMatching:
    @pytest.mark.parametrize(
        ("address", "pattern", "expected"),
        [
            ("10.5.6.7", "10.0.0.0/8", True),
            ("11.0.0.1", "10.0.0.0/8", False),
            ("192.168.9.9", "192.168.*.*", True),
            ("192.169.9.9", "192.168.*.*", False),
            ("127.0.0.1", "127.0.0.1", True),
            ("2001:db8::1", "2001:db8::/32", True),
            ("10.0.0.1", "2001:db8::/32", False),
            ("10.0.0.1", "10.0.0.0/33", False),
            ("not-an-ip", "10.0.0.0/8", False),
        ],
    )
    def test_ip_matches(self, address: str, pattern: str, expected: bool) -> None:
        assert ip_matches(address, pattern) is expected

    def test_comparator_with_pattern_list(self) -> None:
        op = IpComparator()
        patterns = "10.0.0.0/8\n192.168.*.*"
        assert op.compare("ip_match", patterns, "192.168.1.20") is True
        assert op.compare("ip_not_match", patterns, "8.8.8.8") is True

    def test_non_ip_operator_is_false(self) -> None:
        assert IpComparator().compare("==", "10.0.0.1", "10.0.0.1") is False

    def test_empty_address_only_satisfies_not_match(self) -> None:
        op = IpComparator()
        assert op.compare("ip_match", ["10.0.0.0/8"], "") is False
        assert op.compare("ip_not_match", ["10.0.0.0/8"], None) is True


# ══════════════════════════════════════════════════════════════════════
# Email
# ══════════════════════════════════════════════════════════════════════


class TestEmailMatching:
    def test_split_address(self) -> None:
        assert split_address(" Joe@Example.COM ") == ("joe", "example.com")
        assert split_address("no-at-sign") is None
        assert split_address("@example.com") is None

    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("joe@example.com", True),
            ("JOE@EXAMPLE.COM", True),
            ("ann@example.com", False),
            ("@example.com", True),
            ("@other.com", False),
            (".com", True),
            (".org", False),
            ("example", True),
        ],
    )
    def test_pattern_forms(self, pattern: str, expected: bool) -> None:
        assert email_matches("joe@example.com", "example.com", pattern) is expected

    def test_comparator(self) -> None:
        op = EmailComparator()
        assert op.compare("email_match", ["@example.com"], "Joe@Example.com") is True
        assert op.compare("email_not_match", ["@example.com"], "a@b.org") is True

    def test_malformed_address_only_satisfies_not_match(self) -> None:
        op = EmailComparator()
        assert op.compare("email_match", ["@example.com"], "nope") is False
        assert op.compare("email_not_match", ["@example.com"], "nope") is True

    def test_non_email_operator_is_false(self) -> None:
        assert EmailComparator().compare("contains", "corp", "a@corp.com") is False

    def test_no_patterns_only_satisfies_not_match(self) -> None:
        op = EmailComparator()
        assert op.compare("email_match", [], "joe@example.com") is False
        assert op.compare("email_not_match", "", "joe@example.com") is True


# ══════════════════════════════════════════════════════════════════════
# Registry
# ══════════════════════════════════════════════════════════════════════


class _AlwaysTrue(Comparator):
    field_types = (FieldType.TEXT,)

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        return True


class TestComparatorRegistry:
    def test_lookup_by_type_and_multiplicity(self, comparators) -> None:
        assert isinstance(comparators.get(FieldType.SELECT, False), EqualityComparator)
        assert isinstance(comparators.get("select", True), CollectionComparator)
        assert isinstance(comparators.get(FieldType.POST, False), CollectionComparator)

    def test_operator_route_wins_over_type(self, comparators) -> None:
        routed = comparators.get(FieldType.TEXT, False, "ip_match")
        assert isinstance(routed, IpComparator)
        assert comparators.compare(
            FieldType.TEXT, False, "email_match", "@example.com", "a@example.com"
        )

    def test_invalid_type_returns_none(self, comparators) -> None:
        assert comparators.get("geometry") is None
        assert comparators.compare("geometry", False, "==", 1, 1) is False

    def test_supported_types(self, comparators) -> None:
        assert comparators.supported_types == set(FieldType)

    def test_later_registration_replaces(self) -> None:
        registry = ComparatorRegistry()
        registry.register_all(TextComparator(), _AlwaysTrue())
        assert registry.compare(FieldType.TEXT, False, "==", "a", "b") is True
        assert registry.get(FieldType.TEXT_UNIT) is not None
        assert set(registry.routed_operators()) == set()
