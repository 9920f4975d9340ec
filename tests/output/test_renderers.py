"""Tests for operation-specific Rich renderers."""

from jsonrules.output.renderers import render_quiet, render_result
from jsonrules.services.result import ServiceError, ServiceResult


class TestRenderCheck:
    def test_ok_lists_rules(self) -> None:
        result = ServiceResult(
            ok=True,
            op="check",
            data={"valid": True, "errors": {}, "rules": ["type", "minLength"]},
        )
        output = render_result(result)
        assert "OK" in output
        assert "check" in output
        assert "type, minLength" in output

    def test_ok_without_rules(self) -> None:
        result = ServiceResult(ok=True, op="check", data={"valid": True, "errors": {}, "rules": []})
        assert "(none)" in render_result(result)

    def test_failure_table(self) -> None:
        errors = {"minLength": {"required_length": 3, "current_length": 2}}
        result = ServiceResult(
            ok=False,
            op="check",
            data={"valid": False, "errors": errors, "rules": ["minLength"]},
            error=ServiceError(code="INVALID", message="Value failed: minLength", detail=errors),
        )
        output = render_result(result)
        assert "ERROR" in output
        assert "Value failed: minLength" in output
        assert "Rule" in output
        assert '"required_length":3' in output

    def test_error_without_errors_shows_detail_when_verbose(self) -> None:
        result = ServiceResult(
            ok=False,
            op="check",
            error=ServiceError(
                code="UNKNOWN_RULE",
                message="Unknown rule(s): bogus",
                detail={"unknown": ["bogus"]},
            ),
        )
        assert "unknown:" not in render_result(result)
        assert "unknown: ['bogus']" in render_result(result, verbose=True)


class TestRenderListRules:
    def test_table_and_count(self) -> None:
        result = ServiceResult(
            ok=True, op="list_rules", data={"rules": ["maxLength", "type"], "count": 2}
        )
        output = render_result(result)
        assert "maxLength" in output
        assert "type" in output
        assert "count:  2" in output


class TestRenderGeneric:
    def test_unknown_op_key_values(self) -> None:
        result = ServiceResult(ok=True, op="other", data={"answer": 42, "items": [1, 2]})
        output = render_result(result)
        assert "answer:  42" in output
        assert "items:  [1,2]" in output


class TestRenderQuiet:
    def test_error_without_payload(self) -> None:
        result = ServiceResult(ok=False, op="check")
        assert render_quiet(result) == "ERROR: check — Unknown error"
