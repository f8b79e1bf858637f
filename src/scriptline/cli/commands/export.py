"""Fountain and PDF export commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptline.cli.commands.parse import ScriptPath
from scriptline.cli.utils.cli_handler import CLIHandler, cli_command
from scriptline.config import get_logger, get_settings, get_settings_for_cli
from scriptline.layout.pdf_export import export_pdf
from scriptline.parser import FountainParser, FountainWriter

logger = get_logger(__name__)
console = Console()


@cli_command
def format_command(
    script_path: ScriptPath,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to this file instead of stdout"),
    ] = None,
) -> None:
    """Normalize a Fountain file by decoding and re-encoding it."""
    settings = get_settings()
    parsed = FountainParser().parse_file(script_path)
    text = FountainWriter(settings.draft_date_format).write(parsed.script)

    if output is None:
        print(text)
        return

    output.write_text(text + "\n", encoding="utf-8")
    logger.info("Wrote Fountain file", path=str(output), lines=len(parsed.lines))
    CLIHandler(console).handle_success(f"Wrote {output}")


@cli_command
def pdf_command(
    script_path: ScriptPath,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Destination PDF file"),
    ],
    title_page: Annotated[
        bool | None,
        typer.Option(
            "--title-page/--no-title-page",
            help="Include a title page (default: from config)",
        ),
    ] = None,
    page_numbers: Annotated[
        bool | None,
        typer.Option(
            "--page-numbers/--no-page-numbers",
            help="Number body pages (default: from config)",
        ),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Render a Fountain file as a fixed-format screenplay PDF."""
    settings = get_settings_for_cli(
        cli_overrides={
            "pdf_include_title_page": title_page,
            "pdf_include_page_numbers": page_numbers,
        }
    )
    parsed = FountainParser().parse_file(script_path)
    layout = export_pdf(
        parsed.script,
        output,
        include_title_page=settings.pdf_include_title_page,
        include_page_numbers=settings.pdf_include_page_numbers,
    )
    CLIHandler(console).handle_success(
        f"Wrote {output} ({layout.page_count} pages)",
        data={
            "output": str(output),
            "pages": layout.page_count,
            "body_pages": layout.body_page_count,
            "title_page": layout.has_title_page,
        },
        json_output=json_output,
    )
