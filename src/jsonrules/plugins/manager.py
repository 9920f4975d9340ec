"""Plugin discovery, loading, and registry construction.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery (``.jsonrules/plugins/`` by default).
Capability: contribute rule factories through ``register_rules``.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pluggy

from jsonrules.plugins.hookspecs import PROJECT_NAME, JsonrulesHookSpec

if TYPE_CHECKING:
    from jsonrules.domain.registry import RuleFactory, RuleRegistry

ENTRY_POINT_GROUP = "jsonrules.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and registry construction."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(JsonrulesHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Uses pluggy's native setuptools entry_point discovery for the
        ``jsonrules.plugins`` group, then scans *local_dir* for single-file
        Python plugins.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Registry construction
    # ------------------------------------------------------------------

    def collect_rules(self) -> dict[str, RuleFactory]:
        """Gather rule factories from every registered plugin.

        A plugin whose hook raises or returns something other than a dict
        is skipped with a warning. When two plugins offer the same name,
        the first one registered wins.
        """
        collected: dict[str, RuleFactory] = {}
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, "register_rules", None)
            if hook is None:
                continue
            try:
                rule_map = hook()
            except Exception:
                logger.warning("Failed to collect rules from plugin %s", plugin_name, exc_info=True)
                continue
            if rule_map is None:
                continue
            if not isinstance(rule_map, dict):
                logger.warning("Plugin %s returned non-dict rule registrations", plugin_name)
                continue
            for rule_name, factory in rule_map.items():
                if rule_name in collected:
                    logger.warning(
                        "Skipping duplicate rule %r from plugin %s",
                        rule_name,
                        plugin_name,
                    )
                    continue
                collected[rule_name] = factory
        return collected

    def build_registry(self, base: RuleRegistry | None = None) -> RuleRegistry:
        """Return a frozen registry: *base* plus every plugin-provided rule.

        Names that clash with *base*, are empty, or carry a non-callable
        factory are skipped with a warning.
        """
        if base is None:
            from jsonrules.domain.registry import RULE_REGISTRY

            base = RULE_REGISTRY

        accepted: dict[str, RuleFactory] = {}
        for rule_name, factory in self.collect_rules().items():
            if not isinstance(rule_name, str) or not rule_name.strip():
                logger.warning("Skipping rule with invalid name %r", rule_name)
                continue
            if rule_name.strip() in base:
                logger.warning("Skipping rule %r: conflicts with a built-in rule", rule_name)
                continue
            if not callable(factory):
                logger.warning("Skipping rule %r: factory is not callable", rule_name)
                continue
            accepted[rule_name] = factory

        if not accepted:
            return base
        logger.debug("Extending rule registry with: %s", sorted(accepted))
        return base.extend(accepted)

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes inside the module that carry pluggy hookimpl-decorated
        methods are instantiated and registered.

        Errors are logged as warnings but never raised: a broken local plugin
        must not prevent the rest of the system from starting.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"jsonrules_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue
                if not self._has_hook_impls(obj):
                    continue
                try:
                    instance = obj()
                    self.register_plugin(instance, name=module_name)
                    logger.debug("Loaded local plugin %s from %s", obj.__name__, py_file)
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("jsonrules")`` sets a ``jsonrules_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "jsonrules_impl", None):
                return True
        return False
