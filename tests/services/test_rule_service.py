"""Tests for RuleService — check and list_rules."""

from __future__ import annotations

from jsonrules.domain.registry import RULE_REGISTRY
from jsonrules.domain.rules import max_length
from jsonrules.services.rules import RuleService


class TestCheck:
    def test_valid_value(self) -> None:
        result = RuleService().check("hello", {"type": "string", "minLength": 3})
        assert result.ok is True
        assert result.op == "check"
        assert result.data == {"valid": True, "errors": {}, "rules": ["type", "minLength"]}
        assert result.error is None

    def test_invalid_value(self) -> None:
        result = RuleService().check("hi", {"type": "string", "minLength": 3, "pattern": "^h"})
        assert result.ok is False
        assert result.data["valid"] is False
        assert result.data["errors"] == {"minLength": {"required_length": 3, "current_length": 2}}
        assert result.error is not None
        assert result.error.code == "INVALID"
        assert result.error.message == "Value failed: minLength"
        assert result.error.detail == result.data["errors"]

    def test_invert(self) -> None:
        service = RuleService()
        assert service.check("hi", {"minLength": 3}, invert=True).ok is True
        assert service.check("hello", {"minLength": 3}, invert=True).ok is False

    def test_unknown_rule_is_a_warning(self) -> None:
        result = RuleService().check("x", {"bogus": 1, "type": "string"})
        assert result.ok is True
        assert result.warnings == ["Unknown rule: bogus"]
        assert result.data["rules"] == ["type"]

    def test_unknown_rule_strict(self) -> None:
        result = RuleService().check("x", {"bogus": 1, "type": "string"}, strict=True)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "UNKNOWN_RULE"
        assert result.error.detail == {"unknown": ["bogus"]}

    def test_no_rules_is_valid(self) -> None:
        result = RuleService().check(42, {})
        assert result.ok is True
        assert result.data["rules"] == []

    def test_dependencies_through_service(self) -> None:
        result = RuleService().check({"a": 1}, {"dependencies": {"a": ["b"]}})
        assert result.ok is False
        assert result.data["errors"] == {"dependencies": {"a": {"b": {"required": True}}}}

    def test_custom_registry(self) -> None:
        registry = RULE_REGISTRY.extend({"short": max_length})
        result = RuleService(registry).check("abcdef", {"short": 3})
        assert result.ok is False
        assert "maxLength" in result.data["errors"]


class TestListRules:
    def test_lists_sorted_names(self) -> None:
        result = RuleService().list_rules()
        assert result.ok is True
        assert result.op == "list_rules"
        assert result.data["rules"] == RULE_REGISTRY.names()
        assert result.data["count"] == len(RULE_REGISTRY)

    def test_includes_extended_rules(self) -> None:
        registry = RULE_REGISTRY.extend({"short": max_length})
        assert "short" in RuleService(registry).list_rules().data["rules"]
