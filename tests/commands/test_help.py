"""Tests for command help text."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from jsonrules.cli import cli


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (["check", "--help"], ["RULES_FILE", "VALUE_FILE", "--invert", "--strict"]),
        (["rules", "--help"], ["List registered rules"]),
    ],
)
def test_help(cli_runner: CliRunner, args: list[str], expected: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for text in expected:
        assert text in result.output
