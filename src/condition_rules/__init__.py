from .builtin import BUILTIN_CONDITIONS, get_builtin
from .comparator import Comparator, ComparatorRegistry
from .comparators import build_default_comparators
from .config import MatcherConfig
from .definitions import (
    CallableValue,
    Condition,
    ConditionDefinition,
    ContextValue,
    ValueProvider,
)
from .exceptions import (
    ConditionRulesError,
    ConfigurationError,
    DuplicateConditionError,
    DuplicateConditionSetError,
    InvalidConditionError,
    InvalidConditionSetError,
    OperatorNotFoundError,
    RegistryFrozenError,
    RuleValidationError,
)
from .matcher import Matcher
from .models import (
    NO_MATCH,
    MatchResult,
    MatchResultCollection,
    Outcome,
    Rule,
    RuleGroup,
    RuleRecord,
)
from .operators import FieldType, Operator, all_operator_groups, operators_for_type
from .periods import AgeValue, age, date_range
from .registry import ConditionCatalog, ConditionLookup, ConditionRegistry, ConditionSet
from .resolver import Resolution, ValueResolver
from .sources import InMemoryRuleSource, RuleQuery, RuleSource
from .validation import ensure_valid, validate_record

__all__ = [
    # Vocabulary
    "Operator",
    "FieldType",
    "operators_for_type",
    "all_operator_groups",
    # Conditions
    "ConditionDefinition",
    "Condition",
    "ValueProvider",
    "ContextValue",
    "CallableValue",
    "BUILTIN_CONDITIONS",
    "get_builtin",
    # Periods
    "AgeValue",
    "age",
    "date_range",
    # Registry
    "ConditionRegistry",
    "ConditionCatalog",
    "ConditionLookup",
    "ConditionSet",
    # Rule data
    "Rule",
    "RuleGroup",
    "RuleRecord",
    "RuleSource",
    "RuleQuery",
    "InMemoryRuleSource",
    # Evaluation
    "Matcher",
    "MatcherConfig",
    "Outcome",
    "MatchResult",
    "MatchResultCollection",
    "NO_MATCH",
    "ValueResolver",
    "Resolution",
    # Comparison strategies
    "Comparator",
    "ComparatorRegistry",
    "build_default_comparators",
    # Validation
    "validate_record",
    "ensure_valid",
    # Exceptions
    "ConditionRulesError",
    "ConfigurationError",
    "InvalidConditionSetError",
    "DuplicateConditionSetError",
    "DuplicateConditionError",
    "InvalidConditionError",
    "RegistryFrozenError",
    "RuleValidationError",
    "OperatorNotFoundError",
]
