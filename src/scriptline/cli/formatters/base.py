"""Shared base for the CLI's output formatters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, TypeVar

from rich.console import Console

T = TypeVar("T")


class OutputFormat(str, Enum):
    """How a command renders its result: human text or machine JSON."""

    TEXT = "text"
    JSON = "json"


class OutputFormatter(ABC, Generic[T]):
    """Turns a command result into a string for one of the output formats.

    Formatters that build rich renderables (tables, panels) print them on
    ``self.console``; plain strings are returned from ``format``.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    @abstractmethod
    def format(self, data: T, format_type: OutputFormat = OutputFormat.TEXT) -> str:
        """Render ``data`` in ``format_type``."""
