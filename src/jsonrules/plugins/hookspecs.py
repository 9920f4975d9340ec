"""Pluggy hook specifications for jsonrules.

One setup-time hook lets plugins contribute rule factories, which are
merged into a copy of the built-in registry before it is frozen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from jsonrules.domain.registry import RuleFactory

PROJECT_NAME = "jsonrules"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class JsonrulesHookSpec:
    """Hook specifications for the jsonrules plugin system."""

    @hookspec
    def register_rules(self) -> dict[str, RuleFactory] | None:
        """Return rule name -> factory mappings to extend the rule registry."""
