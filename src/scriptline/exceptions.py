"""Errors raised by Scriptline, each carrying a message, hint and details."""

from __future__ import annotations

from typing import Any

# Config keys people tend to write, mapped to the setting they meant
COMMON_KEY_MISTAKES: dict[str, str] = {
    "loglevel": "log_level",
    "level": "log_level",
    "date_format": "draft_date_format",
    "title_page": "pdf_include_title_page",
    "page_numbers": "pdf_include_page_numbers",
}


class ScriptlineError(Exception):
    """Base class for every error Scriptline reports to a user.

    The rendered message lists the problem first, then an optional hint on
    how to fix it, then any debugging details as indented key/value pairs.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Store the error parts and render them as the exception text.

        Args:
            message: What went wrong
            hint: How the user might fix it
            details: Values useful when debugging, such as paths or indices
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Render message, hint and details as multi-line text."""
        parts = [f"Error: {self.message}"]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.details:
            parts.append("Details:")
            parts.extend(f"  {key}: {value}" for key, value in self.details.items())
        return "\n".join(parts)


class ConfigurationError(ScriptlineError):
    """A config file or setting could not be used."""


class ParseError(ScriptlineError):
    """A Fountain file could not be read as UTF-8 text.

    The Fountain grammar itself never fails; unrecognized lines become action.
    """


class ValidationError(ScriptlineError):
    """A line list broke a model rule, such as a duplicate id or bad index."""


class ExportError(ScriptlineError):
    """An exported screenplay could not be written to disk."""


def check_config_keys(config: dict[str, Any]) -> None:
    """Reject config dictionaries that use a commonly mistaken key.

    Raises:
        ConfigurationError: Naming the key that should have been used
    """
    for wrong, correct in COMMON_KEY_MISTAKES.items():
        if wrong not in config:
            continue
        raise ConfigurationError(
            message=f"Invalid configuration key '{wrong}'",
            hint=f"Use '{correct}' instead of '{wrong}'",
            details={
                "found_keys": list(config),
                "invalid_key": wrong,
                "correct_key": correct,
            },
        )
