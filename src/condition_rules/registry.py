"""Condition registry with write-once entries and a freezable read phase."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Protocol

from .builtin import get_builtin
from .definitions import Condition, ConditionDefinition
from .exceptions import (
    DuplicateConditionError,
    DuplicateConditionSetError,
    InvalidConditionError,
    InvalidConditionSetError,
    RegistryFrozenError,
)

logger = logging.getLogger(__name__)


class ConditionLookup(Protocol):
    """Read side of the registry, as consumed by the matcher."""

    def lookup(self, set_id: str, condition_id: str) -> ConditionDefinition | None:
        ...


@dataclass(frozen=True, slots=True)
class ConditionSet:
    """A named group of conditions that rule records are authored against."""

    set_id: str
    label: str


class ConditionRegistry:
    """Store of condition definitions keyed by ``(set_id, condition_id)``.

    Build one registry during application start-up, register every set
    and condition, then call :meth:`freeze` and hand the returned
    :class:`ConditionCatalog` to the matcher.

    **Conflict detection:** registering a set or a condition twice raises
    a :class:`~condition_rules.exceptions.ConfigurationError` subclass.
    Registration after :meth:`freeze` raises :class:`RegistryFrozenError`.
    """

    def __init__(self) -> None:
        self._sets: dict[str, ConditionSet] = {}
        self._conditions: dict[str, dict[str, ConditionDefinition]] = {}
        self._frozen = False
        self._lock = threading.Lock()

    # ── Registration ─────────────────────────────────────────────

    def register_set(
        self,
        set_id: str,
        *,
        label: str | None = None,
        conditions: Mapping[str, Any] | Iterable[Any] | None = None,
    ) -> ConditionSet:
        with self._lock:
            condition_set = self._add_set(set_id, label)
        if conditions:
            self.register_many(set_id, conditions)
        return condition_set

    def register(
        self,
        set_id: str,
        condition: str | ConditionDefinition | Condition | type[Condition],
        **config: Any,
    ) -> ConditionDefinition:
        """Register one condition.

        *condition* may be a :class:`ConditionDefinition`, a
        :class:`Condition` subclass or instance, a condition id with
        keyword configuration, or the name of a built-in condition.
        Registering into an unknown set creates the set.
        """
        definition = self._to_definition(condition, config)
        with self._lock:
            self._check_writable(set_id, definition.name)
            if set_id not in self._sets:
                self._add_set(set_id, None)
            conditions = self._conditions[set_id]
            if definition.name in conditions:
                raise DuplicateConditionError(set_id, definition.name)
            conditions[definition.name] = definition
        logger.debug(
            "Registered condition %s.%s (%s)",
            set_id,
            definition.name,
            definition.type.value,
        )
        return definition

    def register_many(
        self, set_id: str, conditions: Mapping[str, Any] | Iterable[Any]
    ) -> list[ConditionDefinition]:
        """Register a mapping of ``id -> config`` or an iterable of conditions."""
        if isinstance(conditions, Mapping):
            return [
                self.register(set_id, condition_id, **dict(config))
                for condition_id, config in conditions.items()
            ]
        return [self.register(set_id, condition) for condition in conditions]

    def freeze(self) -> ConditionCatalog:
        """End the write phase and return a read-only catalog."""
        with self._lock:
            self._frozen = True
        logger.debug(
            "Condition registry frozen with %d set(s): %s",
            len(self._sets),
            ", ".join(self._sets),
        )
        return ConditionCatalog(self)

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ── Lookup ───────────────────────────────────────────────────

    def lookup(self, set_id: str, condition_id: str) -> ConditionDefinition | None:
        return self._conditions.get(set_id, {}).get(condition_id)

    def get_set(self, set_id: str) -> ConditionSet | None:
        return self._sets.get(set_id)

    def conditions(self, set_id: str) -> Mapping[str, ConditionDefinition]:
        return MappingProxyType(self._conditions.get(set_id, {}))

    @property
    def sets(self) -> tuple[str, ...]:
        return tuple(self._sets)

    # ── Internals ────────────────────────────────────────────────

    def _check_writable(self, set_id: str, condition_id: str | None = None) -> None:
        if not set_id or not isinstance(set_id, str):
            raise InvalidConditionSetError(set_id)
        if self._frozen:
            raise RegistryFrozenError(set_id, condition_id)

    def _add_set(self, set_id: str, label: str | None) -> ConditionSet:
        self._check_writable(set_id)
        if set_id in self._sets:
            raise DuplicateConditionSetError(set_id)
        condition_set = ConditionSet(
            set_id=set_id,
            label=label or set_id.replace("_", " ").replace("-", " ").title(),
        )
        self._sets[set_id] = condition_set
        self._conditions[set_id] = {}
        logger.debug("Registered condition set %s", set_id)
        return condition_set

    @staticmethod
    def _to_definition(condition: Any, config: dict[str, Any]) -> ConditionDefinition:
        if isinstance(condition, ConditionDefinition):
            if config:
                raise InvalidConditionError(
                    condition.name, "a ConditionDefinition takes no extra configuration"
                )
            return condition

        if isinstance(condition, type):
            if not issubclass(condition, Condition):
                raise InvalidConditionError(
                    condition.__name__,
                    "class-based conditions must extend condition_rules.Condition",
                )
            condition = condition()

        if isinstance(condition, Condition):
            return condition.to_definition()

        if isinstance(condition, str) and condition:
            if config:
                return ConditionDefinition.from_config(condition, **config)
            builtin = get_builtin(condition)
            if builtin is None:
                raise InvalidConditionError(
                    condition, "built-in condition not found"
                )
            return builtin

        raise InvalidConditionError(condition, "invalid condition format")


class ConditionCatalog:
    """Read-only view over a frozen :class:`ConditionRegistry`."""

    __slots__ = ("_registry",)

    def __init__(self, registry: ConditionRegistry) -> None:
        self._registry = registry

    def lookup(self, set_id: str, condition_id: str) -> ConditionDefinition | None:
        return self._registry.lookup(set_id, condition_id)

    def get_set(self, set_id: str) -> ConditionSet | None:
        return self._registry.get_set(set_id)

    def conditions(self, set_id: str) -> Mapping[str, ConditionDefinition]:
        return self._registry.conditions(set_id)

    @property
    def sets(self) -> tuple[str, ...]:
        return self._registry.sets
