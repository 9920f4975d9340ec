"""Dependency resolver — conditional rules keyed on which fields are present.

A dependency spec maps a *trigger* field to what its presence demands:

* a list of field names that must then be present::

      {"credit_card": ["billing_address"]}

* or a record naming required fields and per-field rules, which are looked
  up by name in the rule registry::

      {"credit_card": {"required": ["billing_address"],
                       "properties": {"billing_address": {"minLength": 5}}}}

Failures nest field -> trigger -> ``{"dependencies": {...}}``. Only property
dependencies and per-field keyword rules are supported; full sub-schema
dependencies are out of scope.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from jsonrules.domain.outcome import VALID, FailureMap, Outcome, Rule, merge_details
from jsonrules.domain.rules import null_rule
from jsonrules.domain.values import has_value, is_array, is_empty, is_object, xor

if TYPE_CHECKING:
    from jsonrules.domain.registry import RuleRegistry

logger = logging.getLogger(__name__)


def _split_entry(entry: Any) -> tuple[list[str], Mapping[str, Any]]:
    """Return ``(required_fields, properties)`` for one trigger entry."""
    if is_array(entry):
        return list(entry), {}
    if is_object(entry):
        required_fields = entry.get("required") or []
        properties = entry.get("properties") or {}
        return list(required_fields), properties if is_object(properties) else {}
    return [], {}


def _field_rule_failures(
    registry: RuleRegistry,
    requirements: Any,
    field_value: Any,
) -> list[FailureMap]:
    if not is_object(requirements):
        return []
    rules, unknown = registry.build_rules(requirements)
    for name in unknown:
        logger.debug("dependencies: skipping unknown rule %r", name)
    failures: list[FailureMap] = []
    for _name, rule in rules:
        outcome = rule(field_value)
        if not outcome.valid:
            failures.append(outcome.errors)
    return failures


def dependencies(spec: Mapping[str, Any] | None, registry: RuleRegistry | None = None) -> Rule:
    """Build the ``dependencies`` rule for a mapping value.

    Args:
        spec: Trigger field -> list of required fields, or
            ``{"required": [...], "properties": {field: {rule: param}}}``.
        registry: Registry used to build per-field rules; defaults to
            :data:`~jsonrules.domain.registry.RULE_REGISTRY`.
    """
    if not is_object(spec) or not spec:
        return null_rule
    entries = dict(spec)

    def _dependencies(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value) or not is_object(value):
            return VALID
        if registry is None:
            from jsonrules.domain.registry import RULE_REGISTRY

            active = RULE_REGISTRY
        else:
            active = registry

        all_errors: FailureMap = {}
        for trigger, entry in entries.items():
            if not has_value(value.get(trigger)):
                continue
            required_fields, properties = _split_entry(entry)

            field_errors: dict[str, FailureMap] = {}
            for field in required_fields:
                if xor(not has_value(value.get(field)), invert):
                    field_errors[field] = {"required": True}

            for field, requirements in properties.items():
                failures = _field_rule_failures(active, requirements, value.get(field))
                if failures:
                    field_errors[field] = merge_details(field_errors.get(field), *failures)

            if field_errors:
                all_errors[trigger] = field_errors

        if not all_errors:
            return VALID
        return Outcome.invalid({"dependencies": all_errors})

    return _dependencies
