"""jsonrules — invertible JSON Schema style validation rules."""

from jsonrules.domain.combinators import all_of, any_of, compose, not_, one_of
from jsonrules.domain.dependencies import dependencies
from jsonrules.domain.fields import Field, StaticField, validate_field
from jsonrules.domain.outcome import VALID, Outcome, merge_details, merge_outcomes
from jsonrules.domain.registry import RULE_REGISTRY, RegistryFrozenError, RuleRegistry
from jsonrules.domain.rules import (
    check_required,
    const,
    contains,
    email,
    enum,
    exclusive_maximum,
    exclusive_minimum,
    format_,
    max_,
    max_items,
    max_length,
    max_properties,
    maximum,
    min_,
    min_items,
    min_length,
    min_properties,
    minimum,
    multiple_of,
    null_rule,
    pattern,
    required,
    required_true,
    type_,
    unique_items,
)
from jsonrules.domain.values import MISSING
from jsonrules.services.concurrent import compose_async
from jsonrules.services.rules import RuleService

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "RULE_REGISTRY",
    "VALID",
    "Field",
    "Outcome",
    "RegistryFrozenError",
    "RuleRegistry",
    "RuleService",
    "StaticField",
    "__version__",
    "all_of",
    "any_of",
    "check_required",
    "compose",
    "compose_async",
    "const",
    "contains",
    "dependencies",
    "email",
    "enum",
    "exclusive_maximum",
    "exclusive_minimum",
    "format_",
    "max_",
    "max_items",
    "max_length",
    "max_properties",
    "maximum",
    "merge_details",
    "merge_outcomes",
    "min_",
    "min_items",
    "min_length",
    "min_properties",
    "minimum",
    "multiple_of",
    "not_",
    "null_rule",
    "one_of",
    "pattern",
    "required",
    "required_true",
    "type_",
    "unique_items",
    "validate_field",
]
