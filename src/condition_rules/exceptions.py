"""
Condition-rules exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``ConditionRulesError`` and provide
``to_dict()`` for API-friendly error responses.

Only configuration-time mistakes raise.  Evaluation never raises for
data problems: those degrade to a skipped or failed rule instead.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class ConditionRulesError(Exception):
    """Base exception for all condition-rules errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ConfigurationError(ConditionRulesError):
    """Raised at setup time for caller programming errors."""


class InvalidConditionSetError(ConfigurationError):
    """Condition set identifier is empty or otherwise unusable."""

    def __init__(self, set_id: str) -> None:
        self.set_id = set_id
        super().__init__(f"Invalid condition set identifier: {set_id!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_CONDITION_SET",
            "set_id": self.set_id,
        }


class DuplicateConditionSetError(ConfigurationError):
    """A condition set with the same identifier is already registered."""

    def __init__(self, set_id: str) -> None:
        self.set_id = set_id
        super().__init__(f'Condition set "{set_id}" is already registered.')

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "DUPLICATE_CONDITION_SET",
            "set_id": self.set_id,
        }


class DuplicateConditionError(ConfigurationError):
    """A condition is already registered under ``(set_id, condition_id)``."""

    def __init__(self, set_id: str, condition_id: str) -> None:
        self.set_id = set_id
        self.condition_id = condition_id
        super().__init__(
            f'Condition "{condition_id}" is already registered in set "{set_id}".'
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "DUPLICATE_CONDITION",
            "set_id": self.set_id,
            "condition_id": self.condition_id,
        }


class InvalidConditionError(ConfigurationError):
    """
    A condition could not be turned into a definition.

    Raised for malformed class-based conditions, unknown built-in names,
    unknown field types and unknown operator overrides.
    """

    def __init__(self, condition: object, reason: str) -> None:
        self.condition = condition
        self.reason = reason
        super().__init__(f"Invalid condition {condition!r}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_CONDITION",
            "condition": repr(self.condition),
            "reason": self.reason,
        }


class RegistryFrozenError(ConfigurationError):
    """Registration attempted after the registry was frozen."""

    def __init__(self, set_id: str, condition_id: str | None = None) -> None:
        self.set_id = set_id
        self.condition_id = condition_id
        target = f"{set_id}.{condition_id}" if condition_id else set_id
        super().__init__(f"Cannot register '{target}': the registry is frozen.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "REGISTRY_FROZEN",
            "set_id": self.set_id,
            "condition_id": self.condition_id,
        }


class RuleValidationError(ConditionRulesError):
    """Rule record structure validation failed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "RULE_VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class OperatorNotFoundError(ConditionRulesError):
    """
    Unknown operator specified.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operators: {', '.join(sorted(valid_operators)[:10])}..."
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }
