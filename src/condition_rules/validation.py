"""
Authoring-time checks for rule records.

The matcher tolerates bad rules by skipping them; these helpers let an
authoring tool report the same problems up front.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .exceptions import OperatorNotFoundError, RuleValidationError
from .models import RuleRecord
from .operators import VALID_OPERATORS

if TYPE_CHECKING:
    from .models import Rule
    from .registry import ConditionLookup


def validate_record(
    catalog: ConditionLookup, set_id: str, record: RuleRecord | dict[str, Any]
) -> list[str]:
    """
    Validate a rule record against a condition set.

    Returns a list of ``"<path>: <problem>"`` messages, empty when the
    record is valid.  Never raises.
    """
    errors: list[str] = []
    if not isinstance(record, RuleRecord):
        try:
            record = RuleRecord.from_dict(record)
        except RuleValidationError as exc:
            errors.append(f"{exc.path}: {exc.message}")
            return errors

    if not record.groups:
        errors.append("groups: record has no groups")

    for g, group in enumerate(record.groups):
        path = f"groups.{g}"
        if not group.rules:
            errors.append(f"{path}: empty group never matches")
        for r, rule in enumerate(group.rules):
            _collect_rule_errors(catalog, set_id, rule, errors, f"{path}.rules.{r}")
    return errors


def ensure_valid(
    catalog: ConditionLookup, set_id: str, record: RuleRecord | dict[str, Any]
) -> RuleRecord:
    """
    Validate and return the record, raising on the first problem.

    Raises:
        OperatorNotFoundError: A rule uses a token outside the vocabulary.
        RuleValidationError: Any other problem; ``path`` locates it.
    """
    if not isinstance(record, RuleRecord):
        record = RuleRecord.from_dict(record)

    for group in record.groups:
        for rule in group.rules:
            if rule.operator and rule.operator not in VALID_OPERATORS:
                raise OperatorNotFoundError(rule.operator, sorted(VALID_OPERATORS))

    errors = validate_record(catalog, set_id, record)
    if errors:
        path, _, message = errors[0].partition(": ")
        raise RuleValidationError(message, path=path)
    return record


def _collect_rule_errors(
    catalog: ConditionLookup,
    set_id: str,
    rule: Rule,
    errors: list[str],
    path: str,
) -> None:
    if not rule.condition:
        errors.append(f"{path}: missing 'condition'")
        return
    if not rule.operator:
        errors.append(f"{path}: missing 'operator'")
        return

    definition = catalog.lookup(set_id, rule.condition)
    if definition is None:
        errors.append(f"{path}: unknown condition '{rule.condition}'")
        return

    if rule.operator not in definition.allowed_operators:
        errors.append(
            f"{path}: operator '{rule.operator}' not allowed for "
            f"'{rule.condition}' ({definition.type.value})"
        )
