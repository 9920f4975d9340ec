"""Extension layer — plugin-provided rules via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus single-file plugins from a local directory.
INVARIANT: Plugin failures are warnings, never errors.
"""

from jsonrules.plugins.hookspecs import hookimpl
from jsonrules.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
