"""Tests for the value model predicates and coercions."""

from __future__ import annotations

import copy

import pytest

from jsonrules.domain.values import (
    MISSING,
    coercive_equal,
    deep_equal,
    get_type,
    has_value,
    is_array,
    is_empty,
    is_number,
    is_object,
    is_type,
    to_coerced,
    xor,
)


class TestMissing:
    def test_is_falsy_singleton(self) -> None:
        assert not MISSING
        assert repr(MISSING) == "MISSING"
        assert type(MISSING)() is MISSING

    def test_survives_copy(self) -> None:
        assert copy.copy(MISSING) is MISSING
        assert copy.deepcopy({"a": MISSING})["a"] is MISSING


class TestEmptiness:
    @pytest.mark.parametrize("value", [None, MISSING, ""])
    def test_empty(self, value: object) -> None:
        assert is_empty(value) is True
        assert has_value(value) is False

    @pytest.mark.parametrize("value", [0, False, " ", [], {}, 0.0])
    def test_not_empty(self, value: object) -> None:
        assert is_empty(value) is False
        assert has_value(value) is True


class TestXor:
    def test_truth_table(self) -> None:
        assert xor(True, False) is True
        assert xor(False, True) is True
        assert xor(True, True) is False
        assert xor(False, False) is False


class TestShapes:
    def test_array(self) -> None:
        assert is_array([1, 2])
        assert is_array((1,))
        assert not is_array("abc")
        assert not is_array({"a": 1})

    def test_object(self) -> None:
        assert is_object({})
        assert not is_object([])


class TestIsNumber:
    def test_bool_is_never_a_number(self) -> None:
        assert is_number(True) is False
        assert is_number(False, strict=True) is False

    def test_nan_is_not_a_number(self) -> None:
        assert is_number(float("nan")) is False

    def test_numeric_string_lenient_only(self) -> None:
        assert is_number("12.5") is True
        assert is_number("12.5", strict=True) is False

    @pytest.mark.parametrize("text", ["abc", "", "inf", "nan", "1,2"])
    def test_non_numeric_strings(self, text: str) -> None:
        assert is_number(text) is False


class TestIsType:
    def test_integer_accepts_integral_float(self) -> None:
        assert is_type(3, "integer")
        assert is_type(3.0, "integer")
        assert not is_type(3.5, "integer")
        assert not is_type(True, "integer")

    def test_primitive_kinds(self) -> None:
        assert is_type("x", "string")
        assert is_type(1.5, "number")
        assert not is_type("1.5", "number")
        assert is_type(False, "boolean")
        assert is_type(None, "null")

    def test_unknown_kind(self) -> None:
        assert is_type({}, "object") is False


class TestToCoerced:
    def test_number(self) -> None:
        assert to_coerced("42", "number") == 42
        assert to_coerced(" 2.5 ", "number") == 2.5
        assert to_coerced("x", "number") is None
        assert to_coerced(True, "number") is None

    def test_integer(self) -> None:
        assert to_coerced("4.0", "integer") == 4
        assert to_coerced("4.5", "integer") is None

    @pytest.mark.parametrize("token", ["true", "TRUE", "1", 1, True])
    def test_boolean_true(self, token: object) -> None:
        assert to_coerced(token, "boolean") is True

    @pytest.mark.parametrize("token", ["false", "0", 0, False])
    def test_boolean_false(self, token: object) -> None:
        assert to_coerced(token, "boolean") is False

    def test_boolean_unrecognized(self) -> None:
        assert to_coerced("yes", "boolean") is None

    def test_string(self) -> None:
        assert to_coerced(True, "string") == "true"
        assert to_coerced(7, "string") == "7"
        assert to_coerced([1], "string") is None

    def test_unknown_kind(self) -> None:
        assert to_coerced("1", "array") is None


class TestEquality:
    def test_deep_equal_nested(self) -> None:
        assert deep_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]})
        assert not deep_equal({"a": [1]}, {"a": [1, 2]})

    def test_deep_equal_keeps_bools_apart(self) -> None:
        assert not deep_equal(1, True)
        assert not deep_equal([0], [False])
        assert deep_equal(True, True)

    def test_coercive_equal_numbers(self) -> None:
        assert coercive_equal(1, "1")
        assert not coercive_equal(1, "2")

    def test_coercive_equal_booleans(self) -> None:
        assert coercive_equal(True, "true")
        assert not coercive_equal(True, "1.5")

    def test_coercive_equal_none_matches_empty(self) -> None:
        assert coercive_equal(None, "")
        assert not coercive_equal(None, "x")


class TestGetType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (MISSING, "undefined"),
            (None, "null"),
            (True, "boolean"),
            (3, "integer"),
            (3.5, "number"),
            ("s", "string"),
            ([1], "array"),
            ({"a": 1}, "object"),
        ],
    )
    def test_names(self, value: object, expected: str) -> None:
        assert get_type(value) == expected
