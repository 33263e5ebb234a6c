"""IP address pattern matching: ip_match, ip_not_match."""

from __future__ import annotations

import ipaddress
from typing import Any

from ..comparator import Comparator
from ..operators import FieldType, Operator
from ..utils import to_patterns, to_text


def ip_matches(address: str, pattern: str) -> bool:
    """
    Match *address* against one pattern.

    A pattern is an exact address, CIDR notation (``10.0.0.0/8``,
    ``2001:db8::/32``) or a dotted wildcard (``192.168.*.*``).
    Malformed literals never match.
    """
    if "/" in pattern:
        return _in_network(address, pattern)
    if "*" in pattern:
        return _wildcard_match(address, pattern)
    return address == pattern


def _in_network(address: str, cidr: str) -> bool:
    try:
        network = ipaddress.ip_network(cidr, strict=False)
        candidate = ipaddress.ip_address(address)
    except ValueError:
        return False
    if candidate.version != network.version:
        return False
    # masking the candidate by the prefix must reproduce the network address
    mask = int(network.netmask)
    return int(candidate) & mask == int(network.network_address) & mask


def _wildcard_match(address: str, pattern: str) -> bool:
    octets = address.split(".")
    parts = pattern.split(".")
    if len(octets) != len(parts):
        return False
    return all(part == "*" or part == octet for part, octet in zip(parts, octets))


class IpComparator(Comparator):
    """
    The user value is one or more patterns, the actual value one address.

    An empty actual address only satisfies ``ip_not_match``.
    """

    field_types = (FieldType.IP,)
    routed_operators = (Operator.IP_MATCH, Operator.IP_NOT_MATCH)

    def compare(self, operator: str, user_value: Any, actual_value: Any) -> bool:
        if operator not in (Operator.IP_MATCH, Operator.IP_NOT_MATCH):
            return False
        address = to_text(actual_value).strip()
        if not address:
            return operator == Operator.IP_NOT_MATCH

        matched = any(ip_matches(address, p) for p in to_patterns(user_value))
        return matched if operator == Operator.IP_MATCH else not matched
