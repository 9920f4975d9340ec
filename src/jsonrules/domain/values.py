"""Emptiness, type, and coercion predicates for JSON values.

A value is anything JSON can carry: ``None``, bool, int, float, str,
a list of values, or a mapping of str to values. ``MISSING`` stands in
for a value that is absent altogether.

Every function here is total: unknown kinds or unconvertible inputs
return ``False`` / ``None`` instead of raising.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any, Final


class _Missing:
    """Sentinel type for an absent value."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self


MISSING: Final = _Missing()

_TRUE_TOKENS: Final = ("true", "1")
_FALSE_TOKENS: Final = ("false", "0")


def xor(a: bool, b: bool) -> bool:
    """Return True when exactly one of *a* and *b* is truthy."""
    return bool(a) != bool(b)


def is_empty(value: Any) -> bool:
    """True for ``None``, ``MISSING``, and the empty string."""
    return value is None or value is MISSING or (isinstance(value, str) and value == "")


def has_value(value: Any) -> bool:
    return not is_empty(value)


def is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_number(value: Any, *, strict: bool = False) -> bool:
    """Check whether *value* is numeric.

    Strict mode accepts only real int/float values (never bool, never NaN).
    Lenient mode also accepts strings that parse as a finite number, which
    is how form inputs usually arrive.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return not math.isnan(value)
    if strict or not isinstance(value, str):
        return False
    return _parse_number(value) is not None


def is_type(value: Any, kind: str) -> bool:
    """Structural type check against a JSON Schema primitive type name."""
    if kind == "string":
        return isinstance(value, str)
    if kind == "number":
        return is_number(value, strict=True)
    if kind == "integer":
        return is_number(value, strict=True) and _is_integral(value)
    if kind == "boolean":
        return isinstance(value, bool)
    if kind == "null":
        return value is None
    return False


def _is_integral(number: int | float) -> bool:
    return isinstance(number, int) or (math.isfinite(number) and number.is_integer())


def _parse_number(text: str) -> int | float | None:
    stripped = text.strip()
    if not stripped:
        return None
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        number = float(stripped)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_coerced(value: Any, kind: str) -> Any:
    """Lossy coercion of *value* to a JSON Schema primitive *kind*.

    Returns ``None`` when no coercion applies (including unknown kinds),
    so callers must compare the result rather than test its truthiness.
    """
    if kind in ("number", "integer"):
        if is_number(value, strict=True):
            number = value
        elif isinstance(value, str):
            number = _parse_number(value)
        else:
            return None
        if number is None:
            return None
        if kind == "integer":
            return int(number) if _is_integral(number) else None
        return number
    if kind == "boolean":
        token = value.strip().lower() if isinstance(value, str) else value
        if token is True or token in _TRUE_TOKENS or (is_number(token, strict=True) and token == 1):
            return True
        if token is False or token in _FALSE_TOKENS or (is_number(token, strict=True) and token == 0):
            return False
        return None
    if kind == "string":
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if is_number(value, strict=True):
            return str(value)
        return None
    if kind == "null":
        return None
    return None


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality that never treats a bool as equal to a number."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    if is_object(a) and is_object(b):
        return a.keys() == b.keys() and all(deep_equal(a[k], b[k]) for k in a)
    if is_array(a) and is_array(b):
        return len(a) == len(b) and all(deep_equal(x, y) for x, y in zip(a, b, strict=True))
    if is_object(a) or is_object(b) or is_array(a) or is_array(b):
        return False
    return bool(a == b)


def coercive_equal(expected: Any, actual: Any) -> bool:
    """Equality used by ``enum`` and ``const``.

    Matches exactly, or after casting *actual* to the type of a numeric or
    boolean *expected* value, or when *expected* is ``None`` and *actual*
    is empty.
    """
    if deep_equal(expected, actual):
        return True
    if is_number(expected, strict=True):
        coerced = to_coerced(actual, "number")
        return coerced is not None and coerced == expected
    if isinstance(expected, bool):
        return to_coerced(actual, "boolean") is expected
    if expected is None:
        return is_empty(actual)
    return False


def get_type(value: Any) -> str:
    """Name the JSON type of *value* (``"undefined"`` for ``MISSING``)."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value, strict=True):
        return "integer" if _is_integral(value) else "number"
    if isinstance(value, str):
        return "string"
    if is_array(value):
        return "array"
    if is_object(value):
        return "object"
    return type(value).__name__
