"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, jsonrules.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- jsonrules.toml sections ---


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    fail_on_unknown_rules: bool = False


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".jsonrules/plugins"


class RulesConfig(BaseModel):
    """Root config model for jsonrules.toml."""

    model_config = {"frozen": True}

    check: CheckConfig = Field(default_factory=CheckConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
