"""PflowSettings: CLI flags, environment, and ``pflow.toml`` in one object.

Precedence, highest first:

1. keyword arguments (the CLI flags passed by :meth:`PflowSettings.from_cli`)
2. ``PFLOW_*`` environment variables (``PFLOW_SIMULATE__MULTIPLIER=2``)
3. the ``pflow.toml`` found by :func:`pflow.config.discovery.find_config`
4. defaults on the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsError,
    TomlConfigSettingsSource,
)

from pflow.config.discovery import find_config
from pflow.config.models import ModelConfig, SimulateConfig

# The TOML file for the settings object currently being built.
_toml_file: ContextVar[Path | None] = ContextVar("pflow_toml_file", default=None)


class PflowSettings(BaseSettings):
    """Frozen settings shared by every command.

    Attributes:
        project_root: Directory of the config file in use, or the cwd.
            Relative ``file.py:function`` declarations resolve against it.
        config_path: The config file in use, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PFLOW_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    model: ModelConfig = Field(default_factory=ModelConfig)
    simulate: SimulateConfig = Field(default_factory=SimulateConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=_toml_file.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> PflowSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* that does not exist is ignored. Without
        one, ``pflow.toml`` is searched for from *project_root* (or the
        cwd) upwards.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        token = _toml_file.set(toml_path)
        try:
            return cls(project_root=project_root, config_path=toml_path, **cli_flags)
        except (tomllib.TOMLDecodeError, SettingsError) as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        finally:
            _toml_file.reset(token)
