"""Condition definitions and the value providers they carry."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Protocol, runtime_checkable

from .exceptions import InvalidConditionError
from .operators import VALID_OPERATORS, FieldType, operators_for_type

Comparison = Callable[[str, Any, Any], bool]


@runtime_checkable
class ValueProvider(Protocol):
    """Produces the actual value of a condition from the evaluation context."""

    def evaluate(self, context: Mapping[str, Any]) -> Any:
        ...


@dataclass(frozen=True, slots=True)
class ContextValue:
    """Pass-through reference to a single context key."""

    key: str

    def evaluate(self, context: Mapping[str, Any]) -> Any:
        return context.get(self.key)


@dataclass(frozen=True, slots=True)
class CallableValue:
    """Wraps a plain function of the context."""

    func: Callable[[Mapping[str, Any]], Any]

    def evaluate(self, context: Mapping[str, Any]) -> Any:
        return self.func(context)


@dataclass(frozen=True, slots=True)
class ConditionDefinition:
    """
    Immutable description of one condition.

    Attributes:
        name: Identifier, unique within its condition set.
        type: Semantic field type; selects the comparison strategy.
        multiple: Multiplicity flag for select-style conditions.
        provider: Computes the actual value; ``None`` always yields ``None``.
        required_context_keys: Keys that must be present in the context
            for the condition to be evaluable.
        operators: Allowed operator tokens; ``None`` means the type default.
        comparison: Optional replacement for the type's strategy.
        label, group, description, units: Authoring metadata only.
    """

    name: str
    type: FieldType = FieldType.TEXT
    multiple: bool = False
    provider: ValueProvider | None = None
    required_context_keys: tuple[str, ...] = ()
    operators: tuple[str, ...] | None = None
    comparison: Comparison | None = field(default=None, compare=False)
    label: str = ""
    group: str = "General"
    description: str = ""
    units: tuple[str, ...] = ()

    @property
    def allowed_operators(self) -> tuple[str, ...]:
        """Operator tokens a rule may use with this condition."""
        if self.operators is not None:
            return self.operators
        return tuple(operators_for_type(self.type, self.multiple))

    def actual_value(self, context: Mapping[str, Any]) -> Any:
        if self.provider is None:
            return None
        return self.provider.evaluate(context)

    def missing_keys(self, context: Mapping[str, Any]) -> list[str]:
        return [key for key in self.required_context_keys if key not in context]

    @classmethod
    def from_config(cls, name: str, **config: Any) -> ConditionDefinition:
        """
        Build a definition from keyword configuration.

        ``arg`` (a context key) and ``compare_value`` (a function of the
        context) are shorthands for ``provider``; at most one of the three
        may be given.
        """
        config = dict(config)
        arg = config.pop("arg", None)
        compare_value = config.pop("compare_value", None)
        provider = config.pop("provider", None)

        given = [p for p in (arg, compare_value, provider) if p is not None]
        if len(given) > 1:
            raise InvalidConditionError(
                name, "give only one of 'arg', 'compare_value' or 'provider'"
            )
        if arg is not None:
            provider = ContextValue(arg)
        elif compare_value is not None:
            if not callable(compare_value):
                raise InvalidConditionError(name, "'compare_value' must be callable")
            provider = CallableValue(compare_value)
        elif provider is not None and not isinstance(provider, ValueProvider):
            raise InvalidConditionError(
                name, "'provider' must implement evaluate(context)"
            )

        unknown = set(config) - _CONFIG_KEYS
        if unknown:
            raise InvalidConditionError(
                name, f"unknown configuration keys: {', '.join(sorted(unknown))}"
            )

        try:
            field_type = FieldType(config.pop("type", FieldType.TEXT))
        except ValueError as exc:
            raise InvalidConditionError(name, str(exc)) from exc

        operators = config.pop("operators", None)
        if operators is not None:
            operators = tuple(str(op) for op in operators)
            bad = [op for op in operators if op not in VALID_OPERATORS]
            if bad:
                raise InvalidConditionError(
                    name, f"unknown operators: {', '.join(bad)}"
                )

        return cls(
            name=name,
            type=field_type,
            multiple=bool(config.pop("multiple", False)),
            provider=provider,
            required_context_keys=tuple(config.pop("required_context_keys", ())),
            operators=operators,
            comparison=config.pop("comparison", None),
            label=config.pop("label", "") or name.replace("_", " ").title(),
            group=config.pop("group", "General"),
            description=config.pop("description", ""),
            units=tuple(config.pop("units", ())),
        )


_CONFIG_KEYS = frozenset(
    {
        "type",
        "multiple",
        "required_context_keys",
        "operators",
        "comparison",
        "label",
        "group",
        "description",
        "units",
    }
)


class Condition:
    """
    Base class for class-based conditions.

    Subclasses set the class attributes and either name a context key in
    ``arg`` or override :meth:`evaluate`.  Defining a ``compare(operator,
    user_value, actual_value)`` method replaces the type's comparison
    strategy for this condition.

    Example::

        class CartTotal(Condition):
            name = "cart_total"
            type = FieldType.NUMBER
            required_context_keys = ("cart",)

            def evaluate(self, context):
                return context["cart"].total
    """

    name: ClassVar[str] = ""
    label: ClassVar[str] = ""
    group: ClassVar[str] = "General"
    description: ClassVar[str] = ""
    type: ClassVar[FieldType | str] = FieldType.TEXT
    multiple: ClassVar[bool] = False
    arg: ClassVar[str | None] = None
    required_context_keys: ClassVar[tuple[str, ...]] = ()
    operators: ClassVar[tuple[str, ...] | None] = None
    units: ClassVar[tuple[str, ...]] = ()

    def evaluate(self, context: Mapping[str, Any]) -> Any:
        if self.arg is not None:
            return context.get(self.arg)
        return None

    def to_definition(self) -> ConditionDefinition:
        if not self.name:
            raise InvalidConditionError(type(self).__name__, "missing 'name'")
        compare = getattr(self, "compare", None)
        if compare is not None and not callable(compare):
            raise InvalidConditionError(self.name, "'compare' must be callable")
        return ConditionDefinition.from_config(
            self.name,
            provider=self,
            type=self.type,
            multiple=self.multiple,
            required_context_keys=self.required_context_keys,
            operators=self.operators,
            comparison=compare,
            label=self.label,
            group=self.group,
            description=self.description,
            units=self.units,
        )
