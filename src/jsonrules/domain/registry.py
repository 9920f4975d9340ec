"""Rule registry — name -> factory lookup for dispatch by keyword.

The dependency resolver (and the CLI) receive rule names as plain strings
taken from a JSON document. The registry turns such a name into a factory
``factory(param) -> Rule`` without any reflection over module attributes.

INVARIANT: ``RULE_REGISTRY`` is populated with every catalog rule at import
time and frozen before first use. Frozen registries are never mutated;
``extend()`` returns a new frozen registry instead.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from jsonrules.domain.dependencies import dependencies
from jsonrules.domain.outcome import Rule
from jsonrules.domain.rules import (
    const,
    contains,
    email,
    enum,
    exclusive_maximum,
    exclusive_minimum,
    format_,
    max_,
    max_items,
    max_length,
    max_properties,
    maximum,
    min_,
    min_items,
    min_length,
    min_properties,
    minimum,
    multiple_of,
    null_rule,
    pattern,
    required,
    required_true,
    type_,
    unique_items,
)

RuleFactory = Callable[..., Rule]

# Bound rules that take a boolean "exclusive" sibling keyword.
EXCLUSIVE_FLAGS: dict[str, str] = {
    "minimum": "exclusiveMinimum",
    "maximum": "exclusiveMaximum",
}

# Rules that resolve nested rule names and so take the building registry.
REGISTRY_AWARE: frozenset[str] = frozenset({"dependencies"})


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a registry that has been frozen."""


class RuleRegistry:
    """Mapping of rule name to rule factory.

    Populate with :meth:`register`, then :meth:`freeze`. After freezing the
    registry is read-only and safe to share between threads.
    """

    def __init__(self, factories: Mapping[str, RuleFactory] | None = None) -> None:
        self._factories: dict[str, RuleFactory] = {}
        self._frozen = False
        for name, factory in (factories or {}).items():
            self.register(name, factory)

    def register(self, name: str, factory: RuleFactory) -> None:
        """Add *factory* under *name*.

        Raises:
            RegistryFrozenError: The registry has been frozen.
            ValueError: *name* is empty or already registered.
            TypeError: *factory* is not callable.
        """
        if self._frozen:
            msg = f"Cannot register rule {name!r}: registry is frozen"
            raise RegistryFrozenError(msg)
        normalized = name.strip()
        if not normalized:
            msg = "Rule name must not be empty"
            raise ValueError(msg)
        if not callable(factory):
            msg = f"Rule factory for {normalized!r} must be callable"
            raise TypeError(msg)
        if normalized in self._factories:
            msg = f"Rule {normalized!r} is already registered"
            raise ValueError(msg)
        self._factories[normalized] = factory

    def freeze(self) -> RuleRegistry:
        """Make the registry read-only. Returns ``self`` for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> RuleFactory | None:
        """Return the factory registered as *name*, or ``None``."""
        return self._factories.get(name)

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def extend(self, extra: Mapping[str, RuleFactory]) -> RuleRegistry:
        """Return a new frozen registry with *extra* factories added.

        Existing names cannot be overridden (``ValueError``).
        """
        extended = RuleRegistry(self._factories)
        for name, factory in extra.items():
            extended.register(name, factory)
        return extended.freeze()

    def build_rules(self, requirements: Mapping[str, Any]) -> tuple[list[tuple[str, Rule]], list[str]]:
        """Build one rule per ``{name: param}`` entry of *requirements*.

        ``minimum``/``maximum`` read a boolean ``exclusiveMinimum``/
        ``exclusiveMaximum`` sibling as their exclusive flag; such a boolean
        sibling is not built as a rule of its own.
        ``dependencies`` is built against this registry, so rules added by
        :meth:`extend` resolve inside its ``properties`` entries too.

        Returns:
            ``(rules, unknown)`` — the built ``(name, rule)`` pairs in input
            order, and the names that had no registered factory.
        """
        rules: list[tuple[str, Rule]] = []
        unknown: list[str] = []
        modifiers = set(EXCLUSIVE_FLAGS.values())
        for name, param in requirements.items():
            if name in modifiers and isinstance(param, bool):
                continue
            factory = self.lookup(name)
            if factory is None:
                unknown.append(name)
                continue
            if name in EXCLUSIVE_FLAGS:
                exclusive = requirements.get(EXCLUSIVE_FLAGS[name]) is True
                rules.append((name, factory(param, exclusive)))
            elif name in REGISTRY_AWARE:
                rules.append((name, factory(param, self)))
            else:
                rules.append((name, factory(param)))
        return rules, unknown


def _enabled(rule: Rule) -> RuleFactory:
    """Factory for a ready-made rule that a falsy param switches off."""

    def _factory(param: Any = True) -> Rule:
        return rule if param else null_rule

    return _factory


def _builtin_factories() -> dict[str, RuleFactory]:
    return {
        "required": required,
        "type": type_,
        "enum": enum,
        "const": const,
        "minLength": min_length,
        "maxLength": max_length,
        "pattern": pattern,
        "format": format_,
        "minimum": minimum,
        "exclusiveMinimum": exclusive_minimum,
        "maximum": maximum,
        "exclusiveMaximum": exclusive_maximum,
        "multipleOf": multiple_of,
        "minProperties": min_properties,
        "maxProperties": max_properties,
        "dependencies": dependencies,
        "minItems": min_items,
        "maxItems": max_items,
        "uniqueItems": unique_items,
        "contains": contains,
        "min": min_,
        "max": max_,
        "requiredTrue": _enabled(required_true),
        "email": _enabled(email),
    }


RULE_REGISTRY: RuleRegistry = RuleRegistry(_builtin_factories()).freeze()
