"""Fountain screenplay decoder."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from scriptline.config import get_logger
from scriptline.exceptions import ParseError
from scriptline.models import Line, Script
from scriptline.parser.classifier import ClassifierState, classify_line, is_blank

logger = get_logger(__name__)

DEFAULT_TITLE = "Untitled"

LINE_SPLIT_PATTERN = re.compile(r"\r?\n")
TITLE_PAGE_PATTERN = re.compile(r"^([A-Za-z][A-Za-z ]*):\s*(.*)$")

# Recognized title page keys mapped to FountainMetadata attributes
TITLE_PAGE_KEYS = {
    "title": "title",
    "credit": "credit",
    "author": "author",
    "authors": "author",
    "source": "source",
    "draft date": "draft_date",
    "date": "draft_date",
    "contact": "contact",
    "copyright": "copyright",
    "notes": "notes",
}


@dataclass
class FountainMetadata:
    """Values read from a Fountain title page."""

    title: str | None = None
    author: str | None = None
    credit: str | None = None
    source: str | None = None
    draft_date: str | None = None
    contact: str | None = None
    copyright: str | None = None
    notes: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        """Return True when no title page entry was found."""
        return not self.extra and all(
            getattr(self, name) is None for name in set(TITLE_PAGE_KEYS.values())
        )


@dataclass
class ParsedFountain:
    """Decoder output: title page metadata, body lines and script fields."""

    metadata: FountainMetadata
    lines: list[Line]
    script: Script


@dataclass
class ValidationResult:
    """Advisory validation outcome; callers decide whether to block."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def split_lines(text: str) -> list[str]:
    """Split raw text on LF or CRLF line endings."""
    return LINE_SPLIT_PATTERN.split(text)


def _match_title_key(line: str) -> tuple[str, str] | None:
    match = TITLE_PAGE_PATTERN.match(line)
    if not match:
        return None
    return match.group(1).strip().lower(), match.group(2).strip()


def is_title_page_entry(line: str) -> bool:
    """Check for a ``Key: value`` line with a recognized title page key."""
    entry = _match_title_key(line)
    return entry is not None and entry[0] in TITLE_PAGE_KEYS


def _opens_title_page(line: str) -> bool:
    entry = _match_title_key(line)
    return entry is not None and (entry[0] in TITLE_PAGE_KEYS or bool(entry[1]))


def _next_non_blank(raw_lines: list[str], start: int) -> int | None:
    for index in range(start, len(raw_lines)):
        if not is_blank(raw_lines[index]):
            return index
    return None


def parse_title_page(raw_lines: list[str]) -> tuple[FountainMetadata, int]:
    """Read the optional title page block.

    The block opens with a ``Key: value`` line whose key is recognized or
    whose value is non-empty, so a bare ``FADE IN:`` stays in the body. A
    blank line ends it unless the next non-blank line is a recognized entry.
    Indented lines continue the value of the entry above them.

    Args:
        raw_lines: The whole document split into raw lines

    Returns:
        Tuple of (metadata, index of the first body line)
    """
    metadata = FountainMetadata()
    first = _next_non_blank(raw_lines, 0)
    if first is None or not _opens_title_page(raw_lines[first]):
        return metadata, 0

    values: dict[str, str] = {}
    current_key: str | None = None
    index = first
    while index < len(raw_lines):
        line = raw_lines[index]

        if is_blank(line):
            following = _next_non_blank(raw_lines, index + 1)
            if following is None:
                index = len(raw_lines)
                break
            if is_title_page_entry(raw_lines[following]):
                index = following
                continue
            index = following
            break

        entry = _match_title_key(line)
        if entry is not None:
            current_key, value = entry
            values[current_key] = value
        elif current_key is not None and line[:1] in (" ", "\t"):
            previous = values[current_key]
            continued = line.strip()
            values[current_key] = f"{previous}\n{continued}" if previous else continued
        else:
            break
        index += 1

    for key, value in values.items():
        attribute = TITLE_PAGE_KEYS.get(key)
        if attribute is None:
            metadata.extra[key] = value
        else:
            setattr(metadata, attribute, value)

    return metadata, index


class FountainParser:
    """Decode Fountain text into title page metadata and typed lines."""

    def parse_body(self, raw_lines: list[str], start: int = 0) -> list[Line]:
        """Classify body lines, emitting one Line per non-blank raw line.

        Args:
            raw_lines: The document split into raw lines
            start: Index of the first body line

        Returns:
            Lines in reading order, each with a fresh id
        """
        lines: list[Line] = []
        state = ClassifierState()
        for index in range(start, len(raw_lines)):
            next_line = raw_lines[index + 1] if index + 1 < len(raw_lines) else None
            classification, state = classify_line(raw_lines[index], state, next_line)
            if classification is None:
                continue
            lines.append(Line(type=classification.type, text=classification.text))
        return lines

    def parse(self, content: str) -> ParsedFountain:
        """Parse Fountain content into structured format.

        Never fails on malformed input: anything that cannot be classified
        becomes action.

        Args:
            content: Raw Fountain text

        Returns:
            Metadata, body lines and the derived script fields
        """
        raw_lines = split_lines(content)
        metadata, body_start = parse_title_page(raw_lines)
        lines = self.parse_body(raw_lines, body_start)

        script = Script(
            title=metadata.title or DEFAULT_TITLE,
            description=metadata.notes or "",
            author=metadata.author,
            lines=lines,
        )
        logger.debug(
            "Parsed Fountain document",
            title=script.title,
            lines=len(lines),
            title_page=not metadata.is_empty(),
        )
        return ParsedFountain(metadata=metadata, lines=lines, script=script)

    def parse_file(self, file_path: Path) -> ParsedFountain:
        """Parse a Fountain file.

        Args:
            file_path: Path to the Fountain file

        Returns:
            Parsed document

        Raises:
            ParseError: If the file cannot be read as UTF-8 text
        """
        logger.debug(f"Parsing fountain file: {file_path}")
        return self.parse(read_fountain_file(file_path))


def validate_fountain(text: str) -> ValidationResult:
    """Check Fountain text for problems worth reporting before import."""
    errors: list[str] = []
    if all(is_blank(line) for line in split_lines(text)):
        errors.append("Document is empty")
    return ValidationResult(valid=not errors, errors=errors)


def read_fountain_file(file_path: Path) -> str:
    """Read a Fountain file as UTF-8 text, tolerating a byte order mark.

    Raises:
        ParseError: If the file cannot be read or is not valid UTF-8
    """
    try:
        return Path(file_path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(
            message=f"Failed to read Fountain file: {file_path}",
            hint="Check that the file exists and is UTF-8 encoded.",
            details={"file": str(file_path), "reason": str(e)},
        ) from e
