"""Email address pattern matching: email_match, email_not_match."""

from __future__ import annotations

from typing import Any

from ..comparator import Comparator
from ..operators import FieldType, Operator
from ..utils import to_patterns, to_text


def split_address(value: str) -> tuple[str, str] | None:
    """Return ``(local, domain)`` lower-cased, or ``None`` if malformed."""
    local, sep, domain = value.strip().lower().rpartition("@")
    if not sep or not local or not domain or "@" in local or " " in value.strip():
        return None
    return local, domain


def email_matches(address: str, domain: str, pattern: str) -> bool:
    """
    Match a parsed address against one pattern.

    The first applicable form wins: a full address (case-insensitive
    equality), ``@domain`` (the address ends with it), ``.tld`` (the domain
    ends with it), or a bare fragment the domain contains.
    """
    pattern = pattern.lower()
    if "@" in pattern and not pattern.startswith("@"):
        return address == pattern
    if pattern.startswith("@"):
        return address.endswith(pattern)
    if pattern.startswith("."):
        return domain.endswith(pattern)
    return pattern in domain


class EmailComparator(Comparator):
    """
    The user value is one or more patterns, the actual value one address.

    An empty or malformed address, or an empty pattern list, only
    satisfies ``email_not_match``.
    """

    field_types = (FieldType.EMAIL,)
    routed_operators = (Operator.EMAIL_MATCH, Operator.EMAIL_NOT_MATCH)

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        if operator not in (Operator.EMAIL_MATCH, Operator.EMAIL_NOT_MATCH):
            return False
        not_match = operator == Operator.EMAIL_NOT_MATCH

        parts = split_address(to_text(actual_value))
        patterns = to_patterns(user_value)
        if parts is None or not patterns:
            return not_match

        local, domain = parts
        address = f"{local}@{domain}"
        matched = any(email_matches(address, domain, p) for p in patterns)
        return not matched if not_match else matched
