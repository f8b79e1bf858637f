"""Line model operations used by the interactive editor.

Every operation takes a line list and returns a new list, leaving its input
untouched, so successive snapshots of a document can be saved or diffed
safely. Ids are preserved on edited lines and freshly generated for new
ones.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from scriptline.exceptions import ValidationError
from scriptline.models import LINE_TYPES, Line, LineType

LIVE_SCENE_PATTERN = re.compile(r"^(INT\.|EXT\.|INT/EXT\.|I/E\.)\s*", re.IGNORECASE)
LIVE_TRANSITION_PATTERN = re.compile(r"\s*TO:$", re.IGNORECASE)

NEXT_TYPE_AFTER_ENTER: dict[LineType, LineType] = {
    LineType.SCENE: LineType.ACTION,
    LineType.ACTION: LineType.ACTION,
    LineType.CHARACTER: LineType.DIALOGUE,
    LineType.PARENTHETICAL: LineType.DIALOGUE,
    LineType.DIALOGUE: LineType.CHARACTER,
    LineType.TRANSITION: LineType.SCENE,
}

UPPERCASE_TYPES = frozenset({LineType.SCENE, LineType.TRANSITION})


@dataclass(frozen=True)
class Caret:
    """Where focus lands after an edit."""

    index: int
    offset: int


def _check_index(lines: Sequence[Line], index: int) -> None:
    if not 0 <= index < len(lines):
        raise ValidationError(
            message=f"Line index {index} is out of range",
            details={"index": index, "line_count": len(lines)},
        )


def new_document_lines() -> list[Line]:
    """Lines for a brand new screenplay: a single empty scene heading."""
    return [Line(type=LineType.SCENE, text="")]


def next_type_after_enter(current: LineType) -> LineType:
    """Type for the line created when Enter is pressed at the end of a line."""
    return NEXT_TYPE_AFTER_ENTER[current]


def cycle_type(current: LineType, delta: int = 1) -> LineType:
    """Step through the line types, wrapping at either end."""
    position = LINE_TYPES.index(current)
    return LINE_TYPES[(position + delta) % len(LINE_TYPES)]


def detect_type(current: LineType, value: str) -> tuple[LineType, str]:
    """Re-type a line from what was just typed into it.

    Typing a scene prefix turns the line into a scene heading and a trailing
    ``TO:`` turns it into a transition. Scene headings and transitions are
    always stored uppercase.
    """
    if LIVE_SCENE_PATTERN.match(value) and current is not LineType.SCENE:
        return LineType.SCENE, value.upper()
    if LIVE_TRANSITION_PATTERN.search(value) and current is not LineType.TRANSITION:
        return LineType.TRANSITION, value.upper()
    if current in UPPERCASE_TYPES:
        return current, value.upper()
    return current, value


def update_line_text(lines: Sequence[Line], index: int, value: str) -> list[Line]:
    """Replace a line's text, applying live type detection."""
    _check_index(lines, index)
    line_type, text = detect_type(lines[index].type, value)
    updated = list(lines)
    updated[index] = lines[index].model_copy(update={"type": line_type, "text": text})
    return updated


def set_line_type(lines: Sequence[Line], index: int, line_type: LineType) -> list[Line]:
    """Explicitly override a line's type."""
    _check_index(lines, index)
    updated = list(lines)
    updated[index] = lines[index].model_copy(update={"type": LineType(line_type)})
    return updated


def split_line(
    lines: Sequence[Line], index: int, offset: int, end: int | None = None
) -> tuple[list[Line], Caret]:
    """Break a line at the caret, as pressing Enter does.

    Text before ``offset`` stays on the current line and text after ``end``
    (the selection end, defaulting to ``offset``) moves to a new line. The
    new line keeps the current type when it carries text, otherwise it takes
    the conventional next type.
    """
    _check_index(lines, index)
    line = lines[index]
    end = offset if end is None else end
    before, after = line.text[:offset], line.text[end:]
    next_type = line.type if after else next_type_after_enter(line.type)

    updated = list(lines)
    updated[index] = line.model_copy(update={"text": before})
    updated.insert(index + 1, Line(type=next_type, text=after))
    return updated, Caret(index + 1, 0)


def backspace_at_start(lines: Sequence[Line], index: int) -> tuple[list[Line], Caret]:
    """Handle Backspace with the caret at the start of a line.

    An empty line is removed when it is not the only line. Otherwise the
    line is merged into the one above it. At the top of the document this
    is a no-op.
    """
    _check_index(lines, index)
    line = lines[index]

    if not line.text and len(lines) > 1:
        updated = [item for position, item in enumerate(lines) if position != index]
        previous = max(0, index - 1)
        return updated, Caret(previous, len(updated[previous].text))

    if index == 0:
        return list(lines), Caret(0, 0)

    previous_line = lines[index - 1]
    caret = Caret(index - 1, len(previous_line.text))
    updated = list(lines)
    updated[index - 1] = previous_line.model_copy(
        update={"text": previous_line.text + line.text}
    )
    del updated[index]
    return updated, caret


def remove_line(lines: Sequence[Line], index: int) -> list[Line]:
    """Delete a line outright."""
    _check_index(lines, index)
    return [item for position, item in enumerate(lines) if position != index]


def search_lines(
    lines: Sequence[Line], query: str, type_filter: LineType | None = None
) -> list[tuple[int, Line]]:
    """Case-insensitive text search, optionally limited to one line type."""
    needle = query.strip().lower()
    if not needle:
        return []
    return [
        (index, line)
        for index, line in enumerate(lines)
        if needle in line.text.lower()
        and (type_filter is None or line.type is LineType(type_filter))
    ]
