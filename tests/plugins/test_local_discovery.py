"""Tests for local directory plugin discovery in PluginManager."""

from __future__ import annotations

from pathlib import Path

from jsonrules.plugins import PluginManager, hookimpl

# -- Plugin source code used in tests ------------------------------------------

_VALID_PLUGIN_SRC = """\
from jsonrules.domain.rules import pattern
from jsonrules.plugins import hookimpl


class LocalRulesPlugin:
    \"\"\"A minimal local plugin contributing one rule.\"\"\"

    @hookimpl
    def register_rules(self):
        return {"zip": lambda enabled=True: pattern(r"^[0-9]{5}$")}
"""

_SYNTAX_ERROR_SRC = """\
def broken(
    # missing closing paren and colon
"""

_NO_HOOKS_SRC = """\
class PlainClass:
    \"\"\"A class with no hookimpl-decorated methods.\"\"\"
    def hello(self) -> str:
        return "world"
"""


class TestLocalDiscovery:
    """Tests for PluginManager._discover_local and friends."""

    def test_discovers_local_plugin(self, tmp_path: Path) -> None:
        (tmp_path / "zipcodes.py").write_text(_VALID_PLUGIN_SRC, encoding="utf-8")

        pm = PluginManager()
        pm.discover_and_load(local_dir=tmp_path)

        assert "jsonrules_local_plugin_zipcodes" in pm.list_plugin_names()

    def test_local_plugin_rules_reach_registry(self, tmp_path: Path) -> None:
        (tmp_path / "zipcodes.py").write_text(_VALID_PLUGIN_SRC, encoding="utf-8")

        pm = PluginManager()
        pm._discover_local(tmp_path)
        registry = pm.build_registry()

        rule = registry.lookup("zip")(True)
        assert rule("12345").valid is True
        assert rule("1234").valid is False

    def test_skips_bad_plugin_gracefully(self, tmp_path: Path) -> None:
        (tmp_path / "broken.py").write_text(_SYNTAX_ERROR_SRC, encoding="utf-8")

        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path)

        assert all("broken" not in n for n in names)

    def test_nonexistent_dir_is_noop(self, tmp_path: Path) -> None:
        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path / "does_not_exist")
        assert pm.is_loaded is True
        assert isinstance(names, list)

    def test_skips_underscore_prefixed_files(self, tmp_path: Path) -> None:
        (tmp_path / "_helpers.py").write_text(_VALID_PLUGIN_SRC, encoding="utf-8")

        pm = PluginManager()
        pm.discover_and_load(local_dir=tmp_path)

        assert all("_helpers" not in n for n in pm.list_plugin_names())

    def test_skips_classes_without_hookimpls(self, tmp_path: Path) -> None:
        (tmp_path / "plain.py").write_text(_NO_HOOKS_SRC, encoding="utf-8")

        pm = PluginManager()
        pm.discover_and_load(local_dir=tmp_path)

        assert all("plain" not in n for n in pm.list_plugin_names())

    def test_has_hook_impls_positive(self) -> None:
        class _WithHook:
            @hookimpl
            def register_rules(self) -> None:
                return None

        assert PluginManager._has_hook_impls(_WithHook) is True

    def test_has_hook_impls_negative(self) -> None:
        class _NoHook:
            def some_method(self) -> None:
                pass

        assert PluginManager._has_hook_impls(_NoHook) is False
