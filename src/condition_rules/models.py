"""Rule data models and match results."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import RuleValidationError


class Outcome(Enum):
    """Result of evaluating a single rule or group."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


class Rule(BaseModel):
    """One ``condition <operator> value`` comparison."""

    model_config = ConfigDict(frozen=True)

    condition: str = ""
    operator: str = ""
    value: Any = None

    @field_validator("condition", "operator", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class RuleGroup(BaseModel):
    """Rules that must all pass (AND)."""

    model_config = ConfigDict(frozen=True)

    rules: tuple[Rule, ...] = ()


class RuleRecord(BaseModel):
    """
    A titled set of groups, any of which may pass (OR).

    ``metadata`` is stored alongside the record by the rule source and is
    never interpreted by the engine.
    """

    model_config = ConfigDict(frozen=True)

    id: int | str
    title: str = ""
    status: str = "publish"
    order: int = 0
    groups: tuple[RuleGroup, ...] = ()
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> RuleRecord:
        """Validate a stored record, raising :class:`RuleValidationError`."""
        if not isinstance(data, dict):
            raise RuleValidationError(
                f"Expected a dict, got {type(data).__name__}", path="<root>"
            )
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            error = exc.errors()[0]
            path = ".".join(str(p) for p in error.get("loc", ())) or "<root>"
            raise RuleValidationError(error.get("msg", str(exc)), path=path) from exc

    @classmethod
    def from_json(cls, text: str) -> RuleRecord:
        """Parse a JSON object and validate it as a record."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RuleValidationError(f"Invalid JSON: {exc}", path="<root>") from exc
        return cls.from_dict(data)


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of a matcher run: whether, and where, a match occurred."""

    matched: bool
    record: RuleRecord | None = None
    group: RuleGroup | None = None

    def __bool__(self) -> bool:
        return self.matched

    @property
    def rule_id(self) -> int | str | None:
        return self.record.id if self.record else None

    @property
    def rule_title(self) -> str | None:
        return self.record.title if self.record else None

    def rule_meta(self, key: str, default: Any = None) -> Any:
        if self.record is None:
            return default
        return self.record.metadata.get(key, default)


NO_MATCH = MatchResult(matched=False)


class MatchResultCollection(Sequence[MatchResult]):
    """Ordered results of a "match all" run, one per matching record."""

    def __init__(self, results: Sequence[MatchResult] = ()) -> None:
        self._results = tuple(results)

    def __getitem__(self, index: Any) -> Any:
        return self._results[index]

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[MatchResult]:
        return iter(self._results)

    def __repr__(self) -> str:
        return f"MatchResultCollection({list(self.rule_ids)!r})"

    @property
    def has_matches(self) -> bool:
        return bool(self._results)

    @property
    def first(self) -> MatchResult | None:
        return self._results[0] if self._results else None

    @property
    def last(self) -> MatchResult | None:
        return self._results[-1] if self._results else None

    @property
    def rule_ids(self) -> list[int | str]:
        return [r.rule_id for r in self._results if r.rule_id is not None]

    @property
    def rule_titles(self) -> list[str]:
        return [r.rule_title for r in self._results if r.rule_title]

    @property
    def records(self) -> list[RuleRecord]:
        return [r.record for r in self._results if r.record is not None]

    def filter(self, predicate: Callable[[MatchResult], bool]) -> MatchResultCollection:
        return MatchResultCollection([r for r in self._results if predicate(r)])

    def map(self, func: Callable[[MatchResult], Any]) -> list[Any]:
        return [func(r) for r in self._results]
