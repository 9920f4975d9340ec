"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``JSONRULES_*`` prefix
  3. TOML file    — ``jsonrules.toml``, see :func:`find_config`
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource`. The
TOML sections are checked against :class:`RulesConfig` as the file is read,
so a bad value is reported against the file that holds it.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from jsonrules.config.models import CheckConfig, PluginsConfig, RulesConfig

CONFIG_FILENAME = "jsonrules.toml"
CONFIG_ENV_VAR = "JSONRULES_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate the config file for a project.

    ``$JSONRULES_CONFIG`` wins when set, and a path that is not a file then
    means "no config". Otherwise the nearest ``jsonrules.toml`` in *start*
    (default: CWD) or one of its parents is used.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _read_toml(toml_path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {toml_path}: {exc}"
        raise click.ClickException(msg) from exc
    try:
        RulesConfig.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid config in {toml_path}: {exc}"
        raise click.ClickException(msg) from exc
    return data


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the ``jsonrules.toml`` picked by :meth:`RulesSettings.from_cli`."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = _read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RulesSettings(BaseSettings):
    """Unified settings for the jsonrules CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.

    Attributes:
        project_root: Directory holding ``jsonrules.toml`` (or CWD if no
            config was found). Relative plugin paths resolve against it.
        config_path: The TOML file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "JSONRULES_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    check: CheckConfig = Field(default_factory=CheckConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @property
    def plugin_dir(self) -> Path:
        """Local plugin directory, resolved against the project root."""
        local = Path(self.plugins.local_dir)
        return local if local.is_absolute() else self.project_root / local

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | Path | None = None,
        project_root: Path | None = None,
        plugins_enabled: bool | None = None,
        **cli_flags: Any,
    ) -> RulesSettings:
        """Construct settings from CLI invocation.

        An explicit *config_path* must exist; otherwise ``jsonrules.toml``
        is discovered with :func:`find_config`. *project_root* defaults to
        the config file's directory. CLI flags override every other source,
        and ``plugins_enabled=False`` (``--no-plugins``) switches plugin
        loading off whatever the ``[plugins]`` section says.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            settings = cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

        if plugins_enabled is not None and plugins_enabled != settings.plugins.enabled:
            plugins = settings.plugins.model_copy(update={"enabled": plugins_enabled})
            settings = settings.model_copy(update={"plugins": plugins})
        return settings
