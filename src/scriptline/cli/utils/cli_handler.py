"""Error and success reporting shared by every CLI command."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, NoReturn

import typer
from rich.console import Console

from scriptline.cli.formatters.json_formatter import JsonFormatter
from scriptline.config import get_logger
from scriptline.exceptions import ScriptlineError, ValidationError

logger = get_logger(__name__)


def _describe(error: Exception) -> str:
    # ScriptlineError's str() carries the hint and details; show them separately
    return error.message if isinstance(error, ScriptlineError) else str(error)


class CLIHandler:
    """Prints command outcomes as rich text or as a JSON envelope."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def _print_error(self, error: Exception, message: str) -> None:
        if isinstance(error, ValidationError):
            self.console.print(f"[red]Validation Error: {message}[/red]")
            return
        self.console.print(f"[red]Error: {message}[/red]")
        hint = error.hint if isinstance(error, ScriptlineError) else None
        if hint:
            self.console.print(f"[yellow]Hint: {hint}[/yellow]")

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> NoReturn:
        """Report ``error`` and exit the command with ``exit_code``.

        JSON output goes to stdout so it can be piped; text goes to the
        handler's console.
        """
        message = _describe(error)
        logger.error("Command failed", error=message, exc_info=error)

        if json_output:
            print(self.json_formatter.format_error_response(message, exit_code))
        else:
            self._print_error(error, message)
        raise typer.Exit(exit_code)

    def handle_success(
        self, message: str, data: Any = None, json_output: bool = False
    ) -> None:
        """Report a finished command, with optional result data for JSON."""
        if json_output:
            print(self.json_formatter.format_success(message, data))
            return
        self.console.print(f"[green]{message}[/green]")


def cli_command(func: Callable[..., Any]) -> Callable[..., Any]:
    """Route any exception a command raises through CLIHandler.handle_error.

    The command's ``json_output`` keyword decides how the error is shown.
    ``typer.Exit`` passes through untouched.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except Exception as e:
            CLIHandler().handle_error(e, json_output=kwargs.get("json_output", False))

    return wrapper
