"""Rule sources: where the matcher gets its ordered rule records from."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from .models import RuleRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RuleQuery:
    """Filter and ordering applied when fetching rule records.

    Attributes:
        statuses: Only records with one of these statuses are returned.
            An empty tuple disables status filtering.
        order_by: Record attribute to sort on (``order``, ``id``, ``title``).
        descending: Reverse the sort.
        limit: Maximum number of records; ``None`` means all.
    """

    statuses: tuple[str, ...] = ("publish",)
    order_by: str = "order"
    descending: bool = False
    limit: int | None = None


class RuleSource(Protocol):
    """Supplies the ordered rule records for a condition set."""

    def get_rules(
        self, set_id: str, query: RuleQuery | None = None
    ) -> Sequence[RuleRecord]:
        ...


class InMemoryRuleSource:
    """
    Rule source backed by plain lists, one per condition set.

    Ties on the sort key keep insertion order.
    """

    def __init__(self) -> None:
        self._records: dict[str, list[RuleRecord]] = {}

    def add(self, set_id: str, record: RuleRecord | dict[str, Any]) -> RuleRecord:
        if not isinstance(record, RuleRecord):
            record = RuleRecord.from_dict(record)
        self._records.setdefault(set_id, []).append(record)
        return record

    def add_many(
        self, set_id: str, records: Iterable[RuleRecord | dict[str, Any]]
    ) -> list[RuleRecord]:
        return [self.add(set_id, record) for record in records]

    @classmethod
    def from_dicts(
        cls, records: dict[str, Iterable[dict[str, Any]]]
    ) -> InMemoryRuleSource:
        """Build a source from ``{set_id: [record_dict, ...]}``."""
        source = cls()
        for set_id, items in records.items():
            source.add_many(set_id, items)
        return source

    def get_rules(
        self, set_id: str, query: RuleQuery | None = None
    ) -> list[RuleRecord]:
        query = query or RuleQuery()
        records = self._records.get(set_id, [])
        if query.statuses:
            records = [r for r in records if r.status in query.statuses]
        records = sorted(
            records,
            key=lambda r: _sort_key(getattr(r, query.order_by, r.order)),
            reverse=query.descending,
        )
        if query.limit is not None:
            records = records[: max(query.limit, 0)]
        logger.debug("Fetched %d rule record(s) for set %s", len(records), set_id)
        return records


def _sort_key(value: Any) -> tuple[int, Any]:
    # numbers sort before strings so mixed id types never raise
    if isinstance(value, int | float) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value))
