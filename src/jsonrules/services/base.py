"""BaseService — shared foundation for jsonrules services.

Every service receives a :class:`RuleRegistry` at construction time and
resolves rule names through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jsonrules.domain.registry import RuleRegistry


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class RuleService(BaseService):
            def check(self, value, requirements) -> ServiceResult:
                rules, unknown = self._registry.build_rules(requirements)
                ...
    """

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        if registry is None:
            from jsonrules.domain.registry import RULE_REGISTRY

            registry = RULE_REGISTRY
        self._registry = registry

    @property
    def registry(self) -> RuleRegistry:
        return self._registry
