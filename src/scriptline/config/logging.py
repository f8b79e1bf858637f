"""Logging configuration for Scriptline.

Scriptline logs through structlog, but records are handed to the standard
library so a single set of handlers (stderr plus an optional rotating file)
renders both structlog events and plain ``logging`` records from other
libraries.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import (
    CallsiteParameter,
    CallsiteParameterAdder,
    TimeStamper,
    add_log_level,
    dict_tracebacks,
    format_exc_info,
)
from structlog.stdlib import ProcessorFormatter, add_logger_name, filter_by_level

from scriptline.config.settings import ScriptlineSettings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

STRUCTURED_KEY_ORDER = ["timestamp", "level", "logger", "event"]


def _console_renderer() -> structlog.dev.ConsoleRenderer:
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.rich_traceback,
    )


def _build_formatter(log_format: str) -> ProcessorFormatter:
    """Create the stdlib formatter for ``console``, ``json`` or ``structured``."""
    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    elif log_format == "structured":
        renderer = structlog.processors.KeyValueRenderer(
            key_order=STRUCTURED_KEY_ORDER, drop_missing=True
        )
    else:
        renderer = _console_renderer()

    return ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[TimeStamper(fmt="iso"), add_log_level, add_logger_name],
    )


def _resolve_level(name: str) -> int:
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        valid = sorted(
            key for key in logging.getLevelNamesMapping() if not key.startswith("_")
        )
        raise ValueError(
            f"Invalid log level '{name}'. Valid levels are: {', '.join(valid)}"
        )
    return level


def _build_handlers(
    settings: ScriptlineSettings, formatter: logging.Formatter, level: int
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=str(log_path),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
    return handlers


def _structlog_processors(settings: ScriptlineSettings) -> list[Any]:
    processors: list[Any] = [
        merge_contextvars,
        filter_by_level,
        TimeStamper(fmt="iso"),
        add_log_level,
        dict_tracebacks,
    ]
    if settings.debug:
        processors.append(
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.FILENAME,
                    CallsiteParameter.LINENO,
                    CallsiteParameter.FUNC_NAME,
                ]
            )
        )
    processors.append(format_exc_info)

    # Under pytest records must reach stdlib handlers for caplog to see them
    in_pytest = "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ
    if settings.log_format != "console" or in_pytest:
        processors.append(ProcessorFormatter.wrap_for_formatter)
    else:
        processors.append(_console_renderer())
    return processors


def configure_logging(settings: ScriptlineSettings) -> None:
    """Install handlers on the root logger and configure structlog.

    Raises:
        ValueError: If the log level is not known to the logging module
    """
    level = _resolve_level(settings.log_level)
    formatter = _build_formatter(settings.log_format)

    logging.basicConfig(
        level=level,
        handlers=_build_handlers(settings, formatter, level),
        force=True,
    )
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=_structlog_processors(settings),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structlog logger without touching the logging configuration."""
    return structlog.get_logger(name)
