"""Scriptline CLI commands."""

from __future__ import annotations

from scriptline.cli.commands.export import format_command, pdf_command
from scriptline.cli.commands.parse import parse_command
from scriptline.cli.commands.stats import scenes_command, stats_command
from scriptline.cli.commands.validate import validate_command

__all__ = [
    "format_command",
    "parse_command",
    "pdf_command",
    "scenes_command",
    "stats_command",
    "validate_command",
]
