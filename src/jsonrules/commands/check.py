"""Command: evaluate a JSON value against a keyword rule mapping."""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING, Any

import click

from jsonrules.commands._base import RulesCommand

if TYPE_CHECKING:
    from jsonrules.commands._context import AppContext


def _load_json(stream: IO[str], label: str) -> Any:
    try:
        return json.load(stream)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {label}: {exc}"
        raise click.ClickException(msg) from exc


@click.command(
    cls=RulesCommand,
    examples="""\
  jsonrules check rules.json value.json
  echo '"hello"' | jsonrules check rules.json -
  jsonrules check rules.json value.json --invert
  jsonrules --json check rules.json value.json --strict""",
)
@click.argument("rules_file", type=click.File("r", encoding="utf-8"))
@click.argument("value_file", type=click.File("r", encoding="utf-8"))
@click.option("--invert", is_flag=True, help="Pass only if the rules fail.")
@click.option("--strict", is_flag=True, help="Fail on unknown rule names instead of skipping them.")
@click.pass_obj
def check(
    app: AppContext,
    rules_file: IO[str],
    value_file: IO[str],
    invert: bool,
    strict: bool,
) -> None:
    """Check the value in VALUE_FILE against the rules in RULES_FILE.

    RULES_FILE holds a JSON object of rule name to parameter, e.g.
    {"type": "string", "minLength": 3}. Use - to read from stdin.
    """
    from jsonrules.services.rules import RuleService

    requirements = _load_json(rules_file, rules_file.name)
    if not isinstance(requirements, dict):
        msg = f"{rules_file.name} must contain a JSON object of rule name to parameter"
        raise click.ClickException(msg)
    value = _load_json(value_file, value_file.name)

    strict = strict or app.settings.check.fail_on_unknown_rules
    app.emit(RuleService(app.registry).check(value, requirements, invert=invert, strict=strict))
