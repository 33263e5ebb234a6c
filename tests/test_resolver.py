"""Tests for value resolution and composite-value decomposition."""

from __future__ import annotations

from condition_rules import ConditionDefinition, FieldType, ValueResolver
from condition_rules.resolver import NUMBER_KEY, TEXT_KEY, UNIT_KEY


def _recording(field_type: FieldType, required=()):
    seen = []

    def provider(context):
        seen.append(dict(context))
        return context.get("value")

    definition = ConditionDefinition.from_config(
        "sample",
        type=field_type,
        compare_value=provider,
        required_context_keys=required,
    )
    return definition, seen


def test_composite_number_is_decomposed() -> None:
    definition, seen = _recording(FieldType.NUMBER_UNIT)
    context = {"value": 3}

    resolution = ValueResolver().resolve(
        definition, context, {"unit": "day", "number": 5}
    )

    assert resolution.user_value == 5
    assert resolution.actual_value == 3
    assert seen[0][UNIT_KEY] == "day"
    assert seen[0][NUMBER_KEY] == 5
    assert resolution.context[UNIT_KEY] == "day"


def test_caller_context_is_not_mutated() -> None:
    definition, _ = _recording(FieldType.NUMBER_UNIT)
    context = {"value": 3}
    ValueResolver().resolve(definition, context, {"unit": "week", "number": 2})
    assert context == {"value": 3}


def test_composite_text_is_decomposed() -> None:
    definition, seen = _recording(FieldType.TEXT_UNIT)
    resolution = ValueResolver().resolve(
        definition, {}, {"unit": "meta_key", "text": "gold"}
    )
    assert resolution.user_value == "gold"
    assert seen[0][TEXT_KEY] == "gold"
    assert NUMBER_KEY not in seen[0]


def test_scalar_passes_through() -> None:
    definition, seen = _recording(FieldType.NUMBER_UNIT)
    context = {"value": 1}
    resolution = ValueResolver().resolve(definition, context, 7)
    assert resolution.user_value == 7
    assert resolution.context is context
    assert UNIT_KEY not in seen[0]


def test_mapping_on_plain_type_passes_through() -> None:
    definition, _ = _recording(FieldType.NUMBER)
    user_value = {"unit": "day", "number": 5}
    resolution = ValueResolver().resolve(definition, {}, user_value)
    assert resolution.user_value == user_value


def test_missing_required_key_skips_provider() -> None:
    definition, seen = _recording(FieldType.NUMBER, required=("order",))
    assert ValueResolver().resolve(definition, {"value": 1}, 1) is None
    assert seen == []


def test_present_key_with_none_value_resolves() -> None:
    definition, _ = _recording(FieldType.NUMBER, required=("order",))
    resolution = ValueResolver().resolve(definition, {"order": None}, 1)
    assert resolution is not None
