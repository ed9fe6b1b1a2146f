"""Unified settings — CLI flags, env vars, and YAML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``PSUCTL_*`` prefix, ``__`` for nested keys
  3. YAML file    — ``.psuctl.yaml`` discovered via walk-up or home dir
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`YamlSettingsSource` that
reuses the ``find_config`` discovery from :mod:`psuctl.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, ClassVar

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from ruamel.yaml.error import YAMLError

from psuctl.config.discovery import find_config, read_config_data
from psuctl.config.models import DefaultsConfig, PortainerConfig


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the ``.psuctl.yaml`` config file."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if yaml_path is not None:
            try:
                self._data = read_config_data(yaml_path)
            except (YAMLError, ValueError) as exc:
                msg = f"Invalid YAML in {yaml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full YAML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for YAML path during construction.
_tls = threading.local()


class PsuSettings(BaseSettings):
    """Unified settings for the entire psuctl CLI.

    Merges CLI flags, environment variables, YAML config sections,
    and code-baked defaults into a single frozen object.  Stored on the
    :class:`~psuctl.commands._context.AppContext` at the CLI root level.

    Attributes:
        config_path: The config file in effect (may not exist yet).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PSUCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- YAML sections ---
    portainer: PortainerConfig = Field(default_factory=PortainerConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    # Retained for type-checker visibility; not used at runtime.
    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source between env vars and defaults."""
        yaml_path = getattr(_tls, "yaml_path", None)
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls, yaml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        portainer: dict[str, Any] | None = None,
        **cli_flags: Any,
    ) -> PsuSettings:
        """Construct settings from CLI invocation.

        Uses the explicit *config_path* or discovers one, then merges CLI
        flags as highest-priority overrides.  *portainer* holds only the
        connection options actually given on the command line; ``None``
        values are dropped so they never mask the file or env vars.
        """
        yaml_path = Path(config_path).expanduser() if config_path else find_config(cwd)

        overrides: dict[str, Any] = dict(cli_flags)
        given = {k: v for k, v in (portainer or {}).items() if v is not None}
        if given:
            overrides["portainer"] = given

        _tls.yaml_path = yaml_path
        try:
            return cls(config_path=yaml_path, **overrides)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            msg = f"Invalid configuration ({yaml_path} or PSUCTL_* environment): {problems}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.yaml_path = None
