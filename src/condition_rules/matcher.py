"""
Rule matcher: OR across a record's groups, AND within a group.

Evaluation never raises for data problems.  A rule that cannot be
evaluated (empty condition or operator, unknown condition, missing
required context key) is SKIPPED, and a skipped rule does not fail its
group.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .comparators import build_default_comparators
from .config import MatcherConfig
from .models import (
    NO_MATCH,
    MatchResult,
    MatchResultCollection,
    Outcome,
    Rule,
    RuleGroup,
    RuleRecord,
)
from .resolver import ValueResolver

if TYPE_CHECKING:
    from .comparator import ComparatorRegistry
    from .definitions import ConditionDefinition
    from .registry import ConditionLookup
    from .sources import RuleQuery, RuleSource

logger = logging.getLogger(__name__)


class Matcher:
    """
    Evaluates the rule records of a condition set against a context.

    Usage::

        catalog = registry.freeze()
        matcher = Matcher(catalog, source)

        result = matcher.check("discounts", {"country": "US", "total": 120})
        if result:
            apply_discount(result.rule_meta("discount"))

    The matcher holds no per-call state, so one instance can serve
    concurrent evaluations once the catalog is frozen.
    """

    def __init__(
        self,
        catalog: ConditionLookup,
        source: RuleSource,
        *,
        comparators: ComparatorRegistry | None = None,
        resolver: ValueResolver | None = None,
        config: MatcherConfig | None = None,
    ) -> None:
        self._catalog = catalog
        self._source = source
        self._comparators = comparators or build_default_comparators()
        self._resolver = resolver or ValueResolver()
        self._config = config or MatcherConfig()

    # -- public API ----------------------------------------------------------

    def check(
        self,
        set_id: str,
        context: Mapping[str, Any],
        query: RuleQuery | None = None,
    ) -> MatchResult:
        """Return the first matching record and group, in source order."""
        start = time.perf_counter()
        for record in self._records(set_id, query):
            group = self.match_record(set_id, record, context)
            if group is not None:
                logger.info(
                    "Set %s matched rule %r in %.2fms",
                    set_id,
                    record.id,
                    (time.perf_counter() - start) * 1000,
                )
                return MatchResult(matched=True, record=record, group=group)

        logger.info(
            "Set %s had no match in %.2fms",
            set_id,
            (time.perf_counter() - start) * 1000,
        )
        return NO_MATCH

    def check_all(
        self,
        set_id: str,
        context: Mapping[str, Any],
        query: RuleQuery | None = None,
    ) -> MatchResultCollection:
        """Return one result per matching record, in source order."""
        start = time.perf_counter()
        results: list[MatchResult] = []
        for record in self._records(set_id, query):
            group = self.match_record(set_id, record, context)
            if group is not None:
                results.append(MatchResult(matched=True, record=record, group=group))

        logger.info(
            "Set %s matched %d rule(s) in %.2fms",
            set_id,
            len(results),
            (time.perf_counter() - start) * 1000,
        )
        return MatchResultCollection(results)

    # -- evaluation ----------------------------------------------------------

    def match_record(
        self, set_id: str, record: RuleRecord, context: Mapping[str, Any]
    ) -> RuleGroup | None:
        """Return the record's first passing group; later groups are not run."""
        for group in record.groups:
            if self.evaluate_group(set_id, group, context) is Outcome.PASS:
                return group
        return None

    def evaluate_group(
        self, set_id: str, group: RuleGroup, context: Mapping[str, Any]
    ) -> Outcome:
        """
        AND the rules of *group*.

        An empty group fails.  The first failing rule fails the group and
        stops evaluation.  A skipped rule counts as passing, so a group of
        only unresolvable rules passes.
        """
        if not group.rules:
            return Outcome.FAIL

        for rule in group.rules:
            outcome = self.evaluate_rule(set_id, rule, context)
            if outcome is Outcome.FAIL:
                return Outcome.FAIL
            if outcome is Outcome.SKIP:
                continue
        return Outcome.PASS

    def evaluate_rule(
        self, set_id: str, rule: Rule, context: Mapping[str, Any]
    ) -> Outcome:
        """Resolve and compare one rule."""
        if not rule.condition or not rule.operator:
            return self._skip(set_id, rule, "empty condition or operator")

        definition = self._catalog.lookup(set_id, rule.condition)
        if definition is None:
            return self._skip(set_id, rule, "unknown condition")

        resolution = self._resolver.resolve(definition, context, rule.value)
        if resolution is None:
            missing = ", ".join(definition.missing_keys(context))
            return self._skip(set_id, rule, f"missing context keys: {missing}")

        passed = self._compare(
            definition, rule.operator, resolution.user_value, resolution.actual_value
        )
        return Outcome.PASS if passed else Outcome.FAIL

    # -- internals -----------------------------------------------------------

    def _records(self, set_id: str, query: RuleQuery | None) -> list[RuleRecord]:
        records = self._source.get_rules(set_id, query or self._config.default_query)
        return [record for record in records if record.groups]

    def _compare(
        self,
        definition: ConditionDefinition,
        operator: str,
        user_value: Any,
        actual_value: Any,
    ) -> bool:
        if definition.comparison is not None:
            return bool(definition.comparison(operator, user_value, actual_value))
        return self._comparators.compare(
            definition.type, definition.multiple, operator, user_value, actual_value
        )

    def _skip(self, set_id: str, rule: Rule, reason: str) -> Outcome:
        if self._config.log_skips:
            logger.debug(
                "Skipped rule %s.%s %s: %s",
                set_id,
                rule.condition or "<empty>",
                rule.operator or "<empty>",
                reason,
            )
        return Outcome.SKIP
