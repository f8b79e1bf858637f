"""Scriptline configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scriptline.exceptions import ConfigurationError, check_config_keys


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def _load_json(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


CONFIG_LOADERS: dict[str, Callable[[Path], dict[str, Any]]] = {
    ".yml": _load_yaml,
    ".yaml": _load_yaml,
    ".toml": _load_toml,
    ".json": _load_json,
}

# Searched in order by get_settings(); later files override earlier ones
CONFIG_FILE_NAMES = ("config.yaml", "config.toml", "config.json")
PROJECT_FILE_NAMES = ("scriptline.yaml", "scriptline.toml", "scriptline.json")


def _without_none(values: dict[str, Any] | None) -> dict[str, Any]:
    return {key: value for key, value in (values or {}).items() if value is not None}


class ScriptlineSettings(BaseSettings):
    """Options for logging and for Fountain and PDF export.

    Values come from, highest precedence first: command line flags, config
    files (YAML, TOML or JSON, later files winning), ``SCRIPTLINE_``
    environment variables, a ``.env`` file, then the defaults below.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRIPTLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Add call site details to log records",
    )

    log_level: str = Field(
        default="WARNING",
        description="Threshold for emitted log records",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Rendering of log records: console, json or structured",
        pattern="^(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Also write log records to this rotating file",
    )

    draft_date_format: str = Field(
        default="%m/%d/%Y",
        description="strftime format for the 'Draft date' title page entry",
        min_length=1,
    )
    pdf_include_title_page: bool = Field(
        default=True,
        description="Render a title page before the screenplay body in PDFs",
    )
    pdf_include_page_numbers: bool = Field(
        default=True,
        description="Number body pages in the top right corner of PDFs",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Resolve the log file, expanding ``$VARS`` and ``~``."""
        if v is None:
            return None
        if isinstance(v, Path):
            return v.resolve()
        if isinstance(v, str):
            return Path(os.path.expandvars(v)).expanduser().resolve()
        raise ValueError(
            f"Path fields must be a string or Path, got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", "log_format", mode="before")
    @classmethod
    def normalize_case(cls, v: Any, info: ValidationInfo) -> str:
        """Accept levels and formats in any case, with stray whitespace."""
        if not isinstance(v, str):
            name = type(v).__name__
            raise ValueError(f"{info.field_name} must be a string, got {name}")
        v = v.strip()
        return v.upper() if info.field_name == "log_level" else v.lower()

    def with_overrides(self, overrides: dict[str, Any] | None) -> ScriptlineSettings:
        """Return a copy with every non-None override applied and revalidated."""
        applied = _without_none(overrides)
        if not applied:
            return self
        return type(self)(**{**self.model_dump(), **applied})

    @classmethod
    def from_env(cls) -> ScriptlineSettings:
        """Create settings from the environment and defaults only."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> ScriptlineSettings:
        """Load settings from one YAML, TOML or JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigurationError: If the suffix is not a supported format, or
                the file uses a commonly mistaken key
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        suffix = path.suffix.lower()
        loader = CONFIG_LOADERS.get(suffix)
        if loader is None:
            supported = sorted(CONFIG_LOADERS)
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint=f"Use one of the supported formats: {', '.join(supported)}",
                details={
                    "file": str(path),
                    "detected_format": suffix,
                    "supported_formats": supported,
                },
            )

        data = loader(path)
        check_config_keys(data)
        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        env_file: Path | str | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> ScriptlineSettings:
        """Merge config files, environment and command line flags.

        Missing config files are logged and skipped. Only values a file
        actually sets take part in the merge, so a later file never resets
        an earlier file's value back to its default.
        """
        data: dict[str, Any] = {}
        for config_file in config_files or []:
            try:
                loaded = cls.from_file(config_file)
            except FileNotFoundError:
                # Imported here; the logging module imports this one
                from scriptline.config.logging import get_logger

                get_logger(__name__).warning(
                    "Configuration file not found, using defaults",
                    config_file=str(config_file),
                )
                continue
            data.update(loaded.model_dump(exclude_unset=True))

        if env_file:
            # pydantic-settings accepts _env_file at construction time
            settings = cast(
                "ScriptlineSettings", cast(Any, cls)(_env_file=env_file, **data)
            )
        else:
            settings = cls(**data)
        return settings.with_overrides(cli_args)


_settings: ScriptlineSettings | None = None


def _get_config_paths() -> list[Path | str]:
    """Existing user-level then project-level config files."""
    user_dir = Path.home() / ".config" / "scriptline"
    candidates = [user_dir / name for name in CONFIG_FILE_NAMES]
    candidates += [Path.cwd() / name for name in PROJECT_FILE_NAMES]

    found: list[Path | str] = []
    for path in candidates:
        try:
            if path.is_file():
                found.append(path)
        except OSError:
            continue
    return found


def get_settings() -> ScriptlineSettings:
    """Return the global settings, loading them on first call."""
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        _settings = (
            ScriptlineSettings.from_multiple_sources(config_files=config_paths)
            if config_paths
            else ScriptlineSettings.from_env()
        )
    return _settings


def set_settings(settings: ScriptlineSettings) -> None:
    """Replace the global settings instance."""
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Drop the global settings so the next get_settings() reloads them."""
    global _settings
    _settings = None


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> ScriptlineSettings:
    """Settings for a CLI invocation.

    An explicit ``--config`` file replaces the standard search locations and
    must exist. Overrides that are None were not given on the command line
    and leave the loaded value alone.

    Raises:
        FileNotFoundError: If ``config_file`` is given but does not exist
    """
    if config_file is None:
        return get_settings().with_overrides(cli_overrides)

    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")
    return ScriptlineSettings.from_multiple_sources(
        config_files=[config_file], cli_args=cli_overrides
    )
