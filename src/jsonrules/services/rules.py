"""RuleService — evaluate a value against a flat keyword mapping.

The mapping has the same shape as a dependency ``properties`` entry,
``{ruleName: param}``: each keyword is built through the registry and the
resulting rules are combined with plain ``compose``. Nested schemas are
not interpreted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from jsonrules.domain.combinators import compose
from jsonrules.services.base import BaseService
from jsonrules.services.result import UNKNOWN_RULE, ServiceResult

logger = logging.getLogger(__name__)


class RuleService(BaseService):
    """Rule evaluation and registry inspection."""

    def check(
        self,
        value: Any,
        requirements: Mapping[str, Any],
        *,
        invert: bool = False,
        strict: bool = False,
    ) -> ServiceResult:
        """Evaluate *value* against every rule named in *requirements*.

        Unknown rule names are skipped with a warning, or fail the whole
        check when *strict* is set.
        """
        rules, unknown = self._registry.build_rules(requirements)
        rule_names = [name for name, _rule in rules]
        warnings = [f"Unknown rule: {name}" for name in unknown]

        if unknown and strict:
            return ServiceResult.failure(
                "check",
                UNKNOWN_RULE,
                f"Unknown rule(s): {', '.join(unknown)}",
                data={"rules": rule_names},
                detail={"unknown": unknown},
            )

        logger.debug("Evaluating %d rule(s): %s", len(rule_names), rule_names)
        outcome = compose([rule for _name, rule in rules])(value, invert)
        return ServiceResult.from_outcome(
            "check", outcome, data={"rules": rule_names}, warnings=warnings
        )

    def list_rules(self) -> ServiceResult:
        """List the rule names the registry can build."""
        names = self._registry.names()
        return ServiceResult(
            ok=True,
            op="list_rules",
            data={"rules": names, "count": len(names)},
        )
