"""Matcher configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from .sources import RuleQuery


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    """Configuration for :class:`~condition_rules.matcher.Matcher`.

    Attributes:
        default_query: Query used when a call does not pass its own.
        log_skips: Log every skipped rule, with its reason, at DEBUG level.
    """

    default_query: RuleQuery = field(default_factory=RuleQuery)
    log_skips: bool = True
