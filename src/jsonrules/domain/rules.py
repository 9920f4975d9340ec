"""Leaf rule catalog — invertible predicates named after JSON Schema keywords.

Every factory returns a :class:`~jsonrules.domain.outcome.Rule`: a pure
callable ``rule(value, invert=False) -> Outcome``. The uniform contract:

1. An empty value (``None``, ``MISSING``, ``""``) is always ``VALID``,
   whatever *invert* says. Only ``required`` and the legacy
   ``required_true`` look at empty values.
2. The rule computes ``is_valid`` with its own logic.
3. The outcome is ``VALID`` iff ``xor(is_valid, invert)``; otherwise it is
   ``Outcome.invalid({rule_name: detail})``.

INVARIANT: Rules close over their construction parameters only, so a rule
may be shared between threads without locking.

Degenerate construction input (an uncompilable regex, a bound that is not
a number) degrades to :func:`null_rule` with a warning, so callers can
compose rules unconditionally.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from typing import Any

from jsonrules.domain.formats import LEGACY_EMAIL, matches_format
from jsonrules.domain.outcome import VALID, Outcome, Rule
from jsonrules.domain.values import (
    coercive_equal,
    deep_equal,
    has_value,
    is_array,
    is_empty,
    is_number,
    is_object,
    is_type,
    to_coerced,
    xor,
)

logger = logging.getLogger(__name__)


def _finish(name: str, is_valid: bool, invert: bool, detail: Any) -> Outcome:
    """Apply the invert flag and wrap a failure under *name*."""
    if xor(is_valid, invert):
        return VALID
    return Outcome.invalid({name: detail})


def _as_number(value: Any) -> int | float | None:
    """Numeric view of *value*, accepting numeric strings."""
    if not is_number(value):
        return None
    coerced: int | float | None = to_coerced(value, "number")
    return coerced


def null_rule(value: Any, invert: bool = False) -> Outcome:
    """No-op rule: always valid."""
    return VALID


def _usable_bound(rule_name: str, bound: Any) -> bool:
    """Check a numeric construction bound, warning when it cannot be used."""
    if is_number(bound, strict=True):
        return True
    logger.warning("%s rule disabled: invalid bound %r", rule_name, bound)
    return False


# ---------------------------------------------------------------------------
# For all values: required, type, enum, const
# ---------------------------------------------------------------------------


def required(enabled: bool = True) -> Rule:
    """Build the ``required`` rule.

    ``required(False)`` returns :func:`null_rule`: a field that is not
    required is always valid. To test a value immediately, use
    :func:`check_required`.
    """
    if not enabled:
        return null_rule

    def _required(value: Any, invert: bool = False) -> Outcome:
        return _finish("required", has_value(value), invert, True)

    return _required


def check_required(value: Any) -> Outcome:
    """Run the ``required`` check against *value* right away."""
    return _finish("required", has_value(value), False, True)


def type_(required_type: str | Sequence[str] | None) -> Rule:
    """Require the value to be of a JSON Schema primitive type.

    A list of types is an OR: any one matching is enough.
    """
    if not required_type:
        return null_rule
    if isinstance(required_type, str):
        kinds: tuple[str, ...] = (required_type,)
    elif is_array(required_type) and all(isinstance(kind, str) for kind in required_type):
        kinds = tuple(required_type)
    else:
        logger.warning("type rule disabled: invalid type name %r", required_type)
        return null_rule

    def _type(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        is_valid = any(is_type(value, kind) for kind in kinds)
        return _finish(
            "type",
            is_valid,
            invert,
            {"required_type": required_type, "current_value": value},
        )

    return _type


def enum(allowed_values: Sequence[Any] | None) -> Rule:
    """Require the value to equal one of *allowed_values*.

    String input is coerced as needed so ``"1"`` matches ``1`` and
    ``"true"`` matches ``True``. A list value must have every element
    allowed.
    """
    if allowed_values is None:
        return null_rule
    if not is_array(allowed_values):
        logger.warning("enum rule disabled: allowed values %r are not a list", allowed_values)
        return null_rule
    allowed = tuple(allowed_values)

    def _is_allowed(item: Any) -> bool:
        return any(coercive_equal(candidate, item) for candidate in allowed)

    def _enum(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        if is_array(value):
            is_valid = all(_is_allowed(item) for item in value)
        else:
            is_valid = _is_allowed(value)
        return _finish(
            "enum",
            is_valid,
            invert,
            {"allowed_values": list(allowed), "current_value": value},
        )

    return _enum


def const(required_value: Any) -> Rule:
    """Require the value to equal *required_value* (with string coercion)."""

    def _const(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        return _finish(
            "const",
            coercive_equal(required_value, value),
            invert,
            {"required_value": required_value, "current_value": value},
        )

    return _const


# ---------------------------------------------------------------------------
# For strings: minLength, maxLength, pattern, format
# ---------------------------------------------------------------------------


def min_length(required_length: int) -> Rule:
    if not _usable_bound("minLength", required_length):
        return null_rule

    def _min_length(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        current_length = len(value) if isinstance(value, str) else 0
        return _finish(
            "minLength",
            current_length >= required_length,
            invert,
            {"required_length": required_length, "current_length": current_length},
        )

    return _min_length


def max_length(required_length: int) -> Rule:
    if not _usable_bound("maxLength", required_length):
        return null_rule

    def _max_length(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        current_length = len(value) if isinstance(value, str) else 0
        return _finish(
            "maxLength",
            current_length <= required_length,
            invert,
            {"required_length": required_length, "current_length": current_length},
        )

    return _max_length


def pattern(required: str | re.Pattern[str] | None, whole_string: bool = False) -> Rule:
    """Require the value to match a regular expression.

    Unlike an HTML ``pattern`` attribute, partial matches pass by default,
    as in JSON Schema. Pass ``whole_string=True`` to anchor the pattern at
    both ends. A compiled pattern keeps its flags either way.
    """
    if not required:
        return null_rule
    if isinstance(required, re.Pattern):
        source, flags = required.pattern, required.flags
        required_pattern = f"^(?:{source})$" if whole_string else source
    elif isinstance(required, str):
        flags = 0
        required_pattern = f"^{required}$" if whole_string else required
    else:
        logger.warning("pattern rule disabled: %r is not a regular expression", required)
        return null_rule
    try:
        regex = re.compile(required_pattern, flags)
    except re.error:
        logger.warning("pattern rule disabled: cannot compile %r", required_pattern, exc_info=True)
        return null_rule

    def _pattern(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        is_valid = isinstance(value, str) and regex.search(value) is not None
        return _finish(
            "pattern",
            is_valid,
            invert,
            {"required_pattern": required_pattern, "current_value": value},
        )

    return _pattern


def format_(required_format: str | None) -> Rule:
    """Require the value to match a named format.

    Known formats: date-time, email, hostname, ipv4, ipv6, uri, url, color.
    An unknown format name logs a warning on each evaluation and passes.
    """
    if not required_format:
        return null_rule

    def _format(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        if not isinstance(value, str):
            is_valid = False
        else:
            matched = matches_format(value, required_format)
            if matched is None:
                logger.warning("format rule: %r is not a recognized format", required_format)
                is_valid = True
            else:
                is_valid = matched
        return _finish(
            "format",
            is_valid,
            invert,
            {"required_format": required_format, "current_value": value},
        )

    return _format


# ---------------------------------------------------------------------------
# For numbers: minimum, exclusiveMinimum, maximum, exclusiveMaximum, multipleOf
#
# A non-numeric value has no minimum or maximum (HTML forms convention), so
# the bound rules pass it. multipleOf does not.
# ---------------------------------------------------------------------------


def minimum(minimum_value: float, exclusive_minimum: bool = False) -> Rule:
    if not _usable_bound("minimum", minimum_value):
        return null_rule

    def _minimum(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        number = _as_number(value)
        if number is None:
            is_valid = True
        elif exclusive_minimum:
            is_valid = number > minimum_value
        else:
            is_valid = number >= minimum_value
        return _finish(
            "minimum",
            is_valid,
            invert,
            {"minimum_value": minimum_value, "current_value": value},
        )

    return _minimum


def exclusive_minimum(exclusive_minimum_value: float) -> Rule:
    if not _usable_bound("exclusiveMinimum", exclusive_minimum_value):
        return null_rule

    def _exclusive_minimum(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        number = _as_number(value)
        is_valid = number is None or number > exclusive_minimum_value
        return _finish(
            "exclusiveMinimum",
            is_valid,
            invert,
            {"exclusive_minimum_value": exclusive_minimum_value, "current_value": value},
        )

    return _exclusive_minimum


def maximum(maximum_value: float, exclusive_maximum: bool = False) -> Rule:
    if not _usable_bound("maximum", maximum_value):
        return null_rule

    def _maximum(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        number = _as_number(value)
        if number is None:
            is_valid = True
        elif exclusive_maximum:
            is_valid = number < maximum_value
        else:
            is_valid = number <= maximum_value
        return _finish(
            "maximum",
            is_valid,
            invert,
            {"maximum_value": maximum_value, "current_value": value},
        )

    return _maximum


def exclusive_maximum(exclusive_maximum_value: float) -> Rule:
    if not _usable_bound("exclusiveMaximum", exclusive_maximum_value):
        return null_rule

    def _exclusive_maximum(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        number = _as_number(value)
        is_valid = number is None or number < exclusive_maximum_value
        return _finish(
            "exclusiveMaximum",
            is_valid,
            invert,
            {"exclusive_maximum_value": exclusive_maximum_value, "current_value": value},
        )

    return _exclusive_maximum


def multiple_of(multiple_of_value: float) -> Rule:
    """Require a numeric value that is a multiple of *multiple_of_value*."""
    if not is_number(multiple_of_value, strict=True) or multiple_of_value == 0:
        logger.warning("multipleOf rule disabled: invalid divisor %r", multiple_of_value)
        return null_rule

    def _multiple_of(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        number = _as_number(value)
        is_valid = number is not None and math.fmod(number, multiple_of_value) == 0
        return _finish(
            "multipleOf",
            is_valid,
            invert,
            {"multiple_of_value": multiple_of_value, "current_value": value},
        )

    return _multiple_of


# ---------------------------------------------------------------------------
# For objects: minProperties, maxProperties (dependencies lives in its own module)
# ---------------------------------------------------------------------------


def min_properties(required_properties: int) -> Rule:
    if not _usable_bound("minProperties", required_properties):
        return null_rule

    def _min_properties(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        current_properties = len(value) if is_object(value) else 0
        return _finish(
            "minProperties",
            current_properties >= required_properties,
            invert,
            {"required_properties": required_properties, "current_properties": current_properties},
        )

    return _min_properties


def max_properties(required_properties: int) -> Rule:
    if not _usable_bound("maxProperties", required_properties):
        return null_rule

    def _max_properties(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        current_properties = len(value) if is_object(value) else 0
        return _finish(
            "maxProperties",
            current_properties <= required_properties,
            invert,
            {"required_properties": required_properties, "current_properties": current_properties},
        )

    return _max_properties


# ---------------------------------------------------------------------------
# For arrays: minItems, maxItems, uniqueItems, contains
# ---------------------------------------------------------------------------


def min_items(required_items: int) -> Rule:
    if not _usable_bound("minItems", required_items):
        return null_rule

    def _min_items(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        current_items = len(value) if is_array(value) else 0
        return _finish(
            "minItems",
            current_items >= required_items,
            invert,
            {"required_items": required_items, "current_items": current_items},
        )

    return _min_items


def max_items(required_items: int) -> Rule:
    if not _usable_bound("maxItems", required_items):
        return null_rule

    def _max_items(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        current_items = len(value) if is_array(value) else 0
        return _finish(
            "maxItems",
            current_items <= required_items,
            invert,
            {"required_items": required_items, "current_items": current_items},
        )

    return _max_items


def unique_items(unique: bool = True) -> Rule:
    """Require list elements to be pairwise distinct.

    Each duplicated element is reported once in ``duplicate_items``.
    """
    if not unique:
        return null_rule

    def _unique_items(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        seen: list[Any] = []
        duplicate_items: list[Any] = []
        # A non-list has no duplicates.
        for item in value if is_array(value) else ():
            if any(deep_equal(item, prior) for prior in seen):
                if not any(deep_equal(item, dup) for dup in duplicate_items):
                    duplicate_items.append(item)
            else:
                seen.append(item)
        return _finish(
            "uniqueItems",
            not duplicate_items,
            invert,
            {"duplicate_items": duplicate_items},
        )

    return _unique_items


def contains(required_item: Any = True) -> Rule:
    """Placeholder for "at least one element matches": every list passes.

    Inverting it still fails every non-empty list, so the invert contract
    holds.
    """
    if not required_item:
        return null_rule

    def _contains(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value) or not is_array(value):
            return VALID
        # TODO: match elements against required_item once item rules can be nested
        return _finish(
            "contains",
            True,
            invert,
            {"required_item": required_item, "current_items": list(value)},
        )

    return _contains


# ---------------------------------------------------------------------------
# Legacy form validators, kept for API compatibility. They ignore *invert*.
#   min -> minimum, max -> maximum, requiredTrue -> const(True), email -> format("email")
# ---------------------------------------------------------------------------


def _legacy_bound(rule_name: str, bound: Any) -> int | float | None:
    """Numeric view of a legacy ``min``/``max`` bound; ``None`` disables the rule."""
    if is_empty(bound):
        return None
    number: int | float | None = to_coerced(bound, "number")
    if number is None:
        logger.warning("%s rule disabled: invalid bound %r", rule_name, bound)
    return number


def min_(min_value: float | str | None) -> Rule:
    """Legacy ``min``: an empty or numeric-string bound is accepted."""
    bound = _legacy_bound("min", min_value)
    if bound is None:
        return null_rule

    def _min(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        number = to_coerced(value, "number")
        # A value that is not a number has no minimum.
        if number is None or number >= bound:
            return VALID
        return Outcome.invalid({"min": {"min": min_value, "actual": value}})

    return _min


def max_(max_value: float | str | None) -> Rule:
    bound = _legacy_bound("max", max_value)
    if bound is None:
        return null_rule

    def _max(value: Any, invert: bool = False) -> Outcome:
        if is_empty(value):
            return VALID
        number = to_coerced(value, "number")
        if number is None or number <= bound:
            return VALID
        return Outcome.invalid({"max": {"max": max_value, "actual": value}})

    return _max


def required_true(value: Any, invert: bool = False) -> Outcome:
    """Require the value to be exactly ``True``."""
    if value is True:
        return VALID
    return Outcome.invalid({"requiredTrue": True})


def email(value: Any, invert: bool = False) -> Outcome:
    """Require a plausible e-mail address (single-expression check)."""
    if is_empty(value):
        return VALID
    if isinstance(value, str) and LEGACY_EMAIL.search(value):
        return VALID
    return Outcome.invalid({"email": True})
