"""Line classification for the Fountain screenplay grammar.

Classification is a pure function of one trimmed line, a small state record
carried from the preceding lines, and a one-line peek at the raw line that
follows. The decoder threads the state through a single pass; nothing is
stored at module level, so classification is reentrant.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from scriptline.models import LineType

SCENE_HEADING_PATTERN = re.compile(
    r"^(?:INT\./EXT|INT/EXT|INT|EXT|EST|I/E)[.\s]", re.IGNORECASE
)
SCENE_NUMBER_PATTERN = re.compile(r"\s*#[^#]+#$")
CHARACTER_PATTERN = re.compile(r"^[A-Z][A-Z0-9 ]*(?:\s*\(.*\))?$")
PARENTHETICAL_PATTERN = re.compile(r"^\(.*\)$")
TRANSITION_PHRASE_PATTERN = re.compile(
    r"^(?:FADE OUT|FADE TO BLACK|CUT TO|DISSOLVE TO|SMASH CUT TO|MATCH CUT TO"
    r"|JUMP CUT TO)[:.]?$",
    re.IGNORECASE,
)
UPPERCASE_TRANSITION_PATTERN = re.compile(r"^[A-Z0-9 .'-]+ TO:$")

FORCED_PREFIXES: dict[str, LineType] = {
    ".": LineType.SCENE,
    "@": LineType.CHARACTER,
    ">": LineType.TRANSITION,
    "!": LineType.ACTION,
}

DIALOGUE_BLOCK_TYPES = frozenset(
    {LineType.CHARACTER, LineType.PARENTHETICAL, LineType.DIALOGUE}
)


@dataclass(frozen=True)
class ClassifierState:
    """Context carried from one body line to the next."""

    in_dialogue_block: bool = False
    just_saw_character_line: bool = False


@dataclass(frozen=True)
class Classification:
    """Result of classifying one non-blank line."""

    type: LineType
    text: str


def is_blank(raw: str | None) -> bool:
    """Return True for None, empty and whitespace-only lines."""
    return raw is None or not raw.strip()


def is_scene_heading(text: str) -> bool:
    """Check for a natural INT/EXT/EST/I-E scene heading."""
    return bool(SCENE_HEADING_PATTERN.match(text))


def is_character_cue(text: str) -> bool:
    """Check for an all-caps cue with an optional parenthetical extension."""
    return bool(CHARACTER_PATTERN.match(text))


def is_transition(text: str) -> bool:
    """Check for a natural transition such as ``CUT TO:``."""
    return bool(
        TRANSITION_PHRASE_PATTERN.match(text)
        or UPPERCASE_TRANSITION_PATTERN.match(text)
    )


def is_parenthetical(text: str) -> bool:
    """Check that the text is fully wrapped in parentheses."""
    return bool(PARENTHETICAL_PATTERN.match(text))


def forced_type(text: str) -> LineType | None:
    """Return the type forced by a leading punctuation mark, if any.

    A leading ``..`` is an ellipsis, not a forced scene heading.
    """
    if not text:
        return None
    if text.startswith(".."):
        return None
    return FORCED_PREFIXES.get(text[0])


def strip_scene_number(text: str) -> str:
    """Remove a trailing ``#12A#`` style scene number."""
    return SCENE_NUMBER_PATTERN.sub("", text).strip()


def _advance(state: ClassifierState, line_type: LineType) -> ClassifierState:
    """Compute the state that follows a line of the given type."""
    if line_type is LineType.CHARACTER:
        return ClassifierState(in_dialogue_block=True, just_saw_character_line=True)
    if line_type in (LineType.DIALOGUE, LineType.PARENTHETICAL):
        return replace(state, just_saw_character_line=False)
    return ClassifierState()


def _classify(
    text: str, state: ClassifierState, next_line: str | None
) -> Classification:
    forced = forced_type(text)
    if forced is not None:
        remainder = text[1:].strip()
        if forced is LineType.SCENE:
            remainder = strip_scene_number(remainder)
        return Classification(forced, remainder)

    if is_scene_heading(text):
        return Classification(LineType.SCENE, strip_scene_number(text))

    if state.just_saw_character_line and is_parenthetical(text):
        return Classification(LineType.PARENTHETICAL, text)

    if state.in_dialogue_block and not is_character_cue(text):
        return Classification(LineType.DIALOGUE, text)

    if is_transition(text):
        return Classification(LineType.TRANSITION, text)

    # A cue is only promoted when dialogue can follow it on the next line
    if (
        is_character_cue(text)
        and not state.in_dialogue_block
        and not is_blank(next_line)
    ):
        return Classification(LineType.CHARACTER, text)

    return Classification(LineType.ACTION, text)


def classify_line(
    raw: str,
    state: ClassifierState,
    next_line: str | None = None,
) -> tuple[Classification | None, ClassifierState]:
    """Classify one raw body line.

    Args:
        raw: The raw line, untrimmed
        state: State produced by the previous call in the same pass
        next_line: The raw line that follows, or None at end of input

    Returns:
        Tuple of (classification, next state). The classification is None
        for blank lines, which only reset the dialogue state.
    """
    if is_blank(raw):
        return None, ClassifierState()

    classification = _classify(raw.strip(), state, next_line)
    return classification, _advance(state, classification.type)
