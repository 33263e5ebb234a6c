"""Tests for the in-memory rule source."""

from __future__ import annotations

from condition_rules import InMemoryRuleSource, RuleQuery, RuleRecord


def _ids(records) -> list:
    return [r.id for r in records]


def test_from_dicts_accepts_stored_group_shape() -> None:
    stored = {"condition": "country", "operator": "==", "value": "US"}
    source = InMemoryRuleSource.from_dicts(
        {"store": [{"id": 1, "groups": [{"rules": [stored]}]}]}
    )
    (record,) = source.get_rules("store")
    assert isinstance(record, RuleRecord)
    assert record.groups[0].rules[0].condition == "country"


def test_default_query_filters_published_and_orders_ascending() -> None:
    source = InMemoryRuleSource()
    source.add_many(
        "store",
        [
            {"id": 1, "order": 5},
            {"id": 2, "order": 1, "status": "draft"},
            {"id": 3, "order": 1},
            {"id": 4, "order": 1},
        ],
    )
    assert _ids(source.get_rules("store")) == [3, 4, 1]


def test_custom_query() -> None:
    source = InMemoryRuleSource()
    source.add_many(
        "store",
        [
            {"id": 1, "order": 5},
            {"id": 2, "order": 1, "status": "draft"},
            {"id": 3, "order": 9},
        ],
    )
    query = RuleQuery(statuses=(), order_by="order", descending=True, limit=2)
    assert _ids(source.get_rules("store", query)) == [3, 1]


def test_order_by_mixed_id_types() -> None:
    source = InMemoryRuleSource()
    source.add_many("store", [{"id": "b"}, {"id": 2}, {"id": "a"}])
    assert _ids(source.get_rules("store", RuleQuery(order_by="id"))) == [2, "a", "b"]


def test_unknown_set_is_empty() -> None:
    assert InMemoryRuleSource().get_rules("nope") == []


def test_negative_limit_returns_nothing() -> None:
    source = InMemoryRuleSource()
    source.add("store", {"id": 1})
    assert source.get_rules("store", RuleQuery(limit=-1)) == []
