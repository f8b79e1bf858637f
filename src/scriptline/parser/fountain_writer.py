"""Fountain screenplay encoder."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from scriptline.config import get_logger
from scriptline.models import Line, LineType, Script
from scriptline.parser.classifier import (
    forced_type,
    is_character_cue,
    is_scene_heading,
    is_transition,
)
from scriptline.parser.fountain_parser import is_title_page_entry

logger = get_logger(__name__)

DEFAULT_DRAFT_DATE_FORMAT = "%m/%d/%Y"


def needs_separator(previous: LineType | None, current: LineType) -> bool:
    """Decide whether a blank line goes between two consecutive elements."""
    if previous is None:
        return False
    if LineType.SCENE in (previous, current):
        return True
    if current is LineType.CHARACTER and previous is not LineType.CHARACTER:
        return True
    if previous is LineType.DIALOGUE and current not in (
        LineType.DIALOGUE,
        LineType.PARENTHETICAL,
    ):
        return True
    return LineType.TRANSITION in (previous, current)


def wrap_parenthetical(text: str) -> str:
    """Wrap text in parentheses unless it already starts and ends with them."""
    if text.startswith("(") and text.endswith(")"):
        return text
    return f"({text})"


def _would_decode_differently(text: str) -> bool:
    stripped = text.strip()
    return (
        forced_type(stripped) is not None
        or is_scene_heading(stripped)
        or is_character_cue(stripped)
        or is_transition(stripped)
        or is_title_page_entry(stripped)
    )


def format_line(line: Line) -> str:
    """Render one line with its Fountain markup.

    Scene headings, cues and natural transitions are uppercased. Anything
    that would not be recognized on its own gets a forcing prefix.
    """
    text = line.text

    if line.type is LineType.SCENE:
        heading = text.upper()
        return heading if is_scene_heading(heading) else f".{heading}"

    if line.type is LineType.CHARACTER:
        return text.upper()

    if line.type is LineType.PARENTHETICAL:
        return wrap_parenthetical(text)

    if line.type is LineType.DIALOGUE:
        return text

    if line.type is LineType.TRANSITION:
        upper = text.upper()
        return upper if is_transition(upper) else f">{text}"

    if _would_decode_differently(text):
        return f"!{text}"
    return text


def format_body(lines: Iterable[Line]) -> list[str]:
    """Render body lines with blank separators between elements.

    Lines without text are left out; written as blank lines they would end
    the surrounding dialogue block when decoded again.
    """
    output: list[str] = []
    last_type: LineType | None = None
    for line in lines:
        if not line.text.strip():
            continue
        if needs_separator(last_type, line.type):
            output.append("")
        output.append(format_line(line))
        last_type = line.type
    return output


class FountainWriter:
    """Encode a script back into Fountain text."""

    def __init__(self, draft_date_format: str = DEFAULT_DRAFT_DATE_FORMAT) -> None:
        """Initialize the writer.

        Args:
            draft_date_format: strftime format for the draft date entry
        """
        self.draft_date_format = draft_date_format

    def title_page(self, script: Script, today: date | None = None) -> list[str]:
        """Render the title page block, terminated by a blank line."""
        today = today or date.today()
        output = [f"Title: {script.title}"]
        if script.author:
            output.append(f"Author: {script.author}")
        output.append(f"Draft date: {today.strftime(self.draft_date_format)}")
        if script.logline:
            output.append(f"Notes: {script.logline}")
        output.append("")
        return output

    def write(self, script: Script, today: date | None = None) -> str:
        """Render a complete Fountain document.

        The result is not guaranteed to decode back to identical lines:
        forcing prefixes and blank-line spacing may differ from the source.

        Args:
            script: Script providing title, author, logline and lines
            today: Date to stamp as the draft date (defaults to today)

        Returns:
            Fountain text
        """
        output = self.title_page(script, today)
        output.extend(format_body(script.lines))
        logger.debug("Encoded Fountain document", lines=len(script.lines))
        return "\n".join(output)
