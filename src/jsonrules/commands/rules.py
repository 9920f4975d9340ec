"""Command: list the rule names available for checks and dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from jsonrules.commands._base import RulesCommand

if TYPE_CHECKING:
    from jsonrules.commands._context import AppContext


@click.command(
    cls=RulesCommand,
    examples="""\
  jsonrules rules
  jsonrules -q rules
  jsonrules --json rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List registered rules, including plugin-provided ones."""
    from jsonrules.services.rules import RuleService

    app.emit(RuleService(app.registry).list_rules())
