"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``ARCHCTL_*`` prefix
  3. TOML file    — ``archctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`archctl.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from archctl.config.discovery import find_config
from archctl.config.models import ForkConfig, IdsConfig, WorkspaceConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``archctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ArchSettings(BaseSettings):
    """Unified settings for the archctl CLI.

    Stored on the :class:`~archctl.commands._context.AppContext` created
    by the root CLI group.

    Attributes:
        workspace_root: Directory the workspace file is resolved against
            (parent of ``archctl.toml``, or CWD if no config found).
        config_path: The config file in use, or None.
        workspace_file: Explicit ``--workspace`` override.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ARCHCTL_",
        "env_nested_delimiter": "__",
    }

    workspace_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    workspace_file: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    fork: ForkConfig = Field(default_factory=ForkConfig)
    ids: IdsConfig = Field(default_factory=IdsConfig)

    @property
    def workspace_path(self) -> Path:
        """Resolved path of the workspace YAML file."""
        if self.workspace_file is not None:
            return self.workspace_file
        return self.workspace_root / self.workspace.file

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

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        workspace_root: Path | None = None,
        workspace_file: str | None = None,
        **cli_flags: Any,
    ) -> ArchSettings:
        """Construct settings from a CLI invocation.

        Discovers ``archctl.toml`` via walk-up (or explicit *config_path*),
        resolves *workspace_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(workspace_root)

        resolved_root = workspace_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        extra: dict[str, Any] = {}
        if workspace_file:
            extra["workspace_file"] = Path(workspace_file)

        _tls.toml_path = toml_path
        try:
            return cls(
                workspace_root=resolved_root,
                config_path=toml_path,
                **extra,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
