"""Output formatters for the Scriptline CLI."""

from scriptline.cli.formatters.base import OutputFormat, OutputFormatter
from scriptline.cli.formatters.json_formatter import JsonFormatter
from scriptline.cli.formatters.screenplay_formatter import ScreenplayFormatter

__all__ = ["JsonFormatter", "OutputFormat", "OutputFormatter", "ScreenplayFormatter"]
