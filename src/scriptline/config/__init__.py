"""Settings and logging setup shared by every Scriptline module."""

from __future__ import annotations

from typing import Any

from scriptline.config.logging import configure_logging
from scriptline.config.logging import get_logger as _structlog_logger
from scriptline.config.settings import (
    ScriptlineSettings,
    clear_settings_cache,
    get_settings,
    get_settings_for_cli,
    set_settings,
)

__all__ = [
    "ScriptlineSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
    "get_settings",
    "get_settings_for_cli",
    "reset_settings",
    "set_settings",
]

_configured = False
_loggers: dict[str, Any] = {}


def get_logger(name: str) -> Any:
    """Return a structlog logger, configuring logging on first use.

    Modules call this at import time, so logging is set up from the global
    settings the first time any module asks for a logger. Loggers are kept
    by name so repeat lookups skip structlog entirely.

    Args:
        name: Logger name, normally the calling module's ``__name__``
    """
    global _configured
    logger = _loggers.get(name)
    if logger is not None:
        return logger

    if not _configured:
        configure_logging(get_settings())
        _configured = True

    logger = _loggers[name] = _structlog_logger(name)
    return logger


def reset_settings() -> None:
    """Forget the global settings and loggers so both are rebuilt on next use."""
    global _configured
    clear_settings_cache()
    _configured = False
    _loggers.clear()
