"""Shared pytest fixtures and test helpers for jsonrules tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from jsonrules.domain.outcome import Outcome
from jsonrules.domain.registry import RULE_REGISTRY, RuleRegistry


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None]:
    """Undo the handlers configure_logging() installs during CLI invocations."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> RuleRegistry:
    """The frozen built-in rule registry."""
    return RULE_REGISTRY


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to an empty temp directory with no config and no plugins.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test
    classes so a ``jsonrules.toml`` further up the tree is never picked up.
    """
    monkeypatch.delenv("JSONRULES_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as JSON to *path* and return the path."""
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def assert_fails_with(outcome: Outcome, *keys: str) -> None:
    """Assert *outcome* is invalid and reports exactly *keys*."""
    assert outcome.valid is False
    assert set(outcome.errors) == set(keys)
