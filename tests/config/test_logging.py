"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from jsonrules.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore the jsonrules logger level after each test."""
    rules = logging.getLogger("jsonrules")
    rules_level = rules.level
    yield
    rules.setLevel(rules_level)


def _installed(root: logging.Logger) -> list[logging.Handler]:
    return [
        h for h in root.handlers if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]


class TestLevels:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("jsonrules").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger("jsonrules").level == logging.WARNING

    def test_quiet_is_error(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("jsonrules").level == logging.ERROR

    def test_verbose_wins_over_quiet(self) -> None:
        configure_logging(verbose=True, quiet=True)
        assert logging.getLogger("jsonrules").level == logging.DEBUG


class TestOutput:
    def test_human_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(stream=stream)
        structlog.get_logger("jsonrules.test").warning("hello world", key="val")
        text = stream.getvalue()
        assert "hello world" in text
        assert "key" in text

    def test_json_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        structlog.get_logger("jsonrules.test").warning("json test", answer=42)
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "jsonrules.test"
        assert "timestamp" in parsed

    def test_defaults_to_stderr(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        logging.getLogger("jsonrules.test").warning("to stderr")
        assert json.loads(capfd.readouterr().err.strip())["event"] == "to stderr"

    def test_rule_module_warnings_get_structured_fields(self) -> None:
        stream = io.StringIO()
        configure_logging(log_json=True, stream=stream)
        from jsonrules.domain.rules import format_

        format_("no-such-format")("value")

        parsed = json.loads(stream.getvalue().strip())
        assert "no-such-format" in parsed["event"]
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "jsonrules.domain.rules"

    def test_rejected_pattern_traceback_is_structured(self) -> None:
        stream = io.StringIO()
        configure_logging(log_json=True, stream=stream)
        from jsonrules.domain.rules import pattern

        pattern("(")

        parsed = json.loads(stream.getvalue().strip())
        assert "cannot compile" in parsed["event"]
        assert parsed["exception"][0]["exc_type"] in ("error", "PatternError")

    def test_debug_suppressed_without_verbose(self) -> None:
        stream = io.StringIO()
        configure_logging(log_json=True, stream=stream)
        logging.getLogger("jsonrules.plugins.manager").debug("Registered plugin: slugs")
        logging.getLogger("pluggy").debug("hook noise")
        assert stream.getvalue() == ""

    def test_quiet_hides_disabled_rule_warnings(self) -> None:
        stream = io.StringIO()
        configure_logging(quiet=True, stream=stream)
        from jsonrules.domain.rules import min_length

        min_length(None)
        assert stream.getvalue() == ""


class TestHandlers:
    def test_idempotent_calls(self) -> None:
        """Repeated calls replace the handler instead of stacking."""
        first = configure_logging(verbose=True)
        second = configure_logging(verbose=True, log_json=True)
        installed = _installed(logging.getLogger())
        assert installed == [second]
        assert first is not second

    def test_foreign_handlers_are_kept(self) -> None:
        root = logging.getLogger()
        other = logging.NullHandler()
        root.addHandler(other)
        try:
            configure_logging()
            assert other in root.handlers
        finally:
            root.removeHandler(other)
