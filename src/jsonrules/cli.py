"""Root ``jsonrules`` command group.

Global flags become a frozen :class:`RulesSettings`; subcommands receive
it wrapped in an :class:`AppContext` through ``@click.pass_obj``.
"""

from __future__ import annotations

from pathlib import Path

import click

from jsonrules import __version__
from jsonrules.commands import register_commands
from jsonrules.commands._context import AppContext
from jsonrules.config.settings import CONFIG_ENV_VAR, RulesSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="jsonrules")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="One-line results; hide rule warnings.")
@click.option("-v", "--verbose", is_flag=True, help="Show rule detail and debug logs.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=f"Config file to use instead of the nearest jsonrules.toml (or ${CONFIG_ENV_VAR}).",
)
@click.option("--no-plugins", is_flag=True, help="Use only the built-in rules.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: Path | None,
    no_plugins: bool,
) -> None:
    """jsonrules — check JSON values against invertible schema rules."""
    settings = RulesSettings.from_cli(
        config_path=config_path,
        plugins_enabled=False if no_plugins else None,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
