"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy registry construction (built-ins plus
plugin rules) and centralized result emission (stdout/stderr routing +
exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from jsonrules.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from jsonrules.config.settings import RulesSettings
    from jsonrules.domain.registry import RuleRegistry
    from jsonrules.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The registry is built lazily on first use so ``--help`` and
    ``--version`` never trigger plugin discovery.
    """

    def __init__(self, settings: RulesSettings) -> None:
        self.settings = settings
        self._registry: RuleRegistry | None = None

        from jsonrules.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def registry(self) -> RuleRegistry:
        """The rule registry (built on first access)."""
        if self._registry is None:
            from jsonrules.domain.registry import RULE_REGISTRY

            if self.settings.plugins.enabled:
                from jsonrules.plugins.manager import PluginManager

                pm = PluginManager()
                pm.discover_and_load(local_dir=self.settings.plugin_dir)
                self._registry = pm.build_registry(RULE_REGISTRY)
            else:
                self._registry = RULE_REGISTRY
        return self._registry

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
