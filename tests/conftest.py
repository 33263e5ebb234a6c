"""Shared fixtures for condition-rules tests."""

from __future__ import annotations

import datetime

import pytest

from condition_rules import (
    ConditionRegistry,
    FieldType,
    InMemoryRuleSource,
    Matcher,
    build_default_comparators,
)


@pytest.fixture
def comparators():
    """Default comparator registry with every built-in strategy."""
    return build_default_comparators()


@pytest.fixture
def registry():
    """Registry holding a small storefront condition set."""
    registry = ConditionRegistry()
    registry.register_set(
        "store",
        label="Store",
        conditions={
            "country": {"arg": "country", "type": "select"},
            "total": {
                "arg": "total",
                "type": "number",
                "required_context_keys": ["total"],
            },
            "roles": {"arg": "roles", "type": "select", "multiple": True},
            "email": {"arg": "email", "type": "email"},
            "ip": {"arg": "ip", "type": "ip"},
            "coupon": {"arg": "coupon", "type": "text"},
            "orders_in_period": {
                "type": FieldType.NUMBER_UNIT,
                "compare_value": lambda ctx: ctx.get("orders", {}).get(
                    ctx.get("_unit"), 0
                ),
                "units": ["day", "week"],
            },
        },
    )
    return registry


@pytest.fixture
def catalog(registry):
    """Frozen view over ``registry``."""
    return registry.freeze()


@pytest.fixture
def source():
    """Empty in-memory rule source."""
    return InMemoryRuleSource()


@pytest.fixture
def matcher(catalog, source):
    return Matcher(catalog, source)


@pytest.fixture
def monday_morning():
    return datetime.datetime(2024, 3, 4, 10, 30)
