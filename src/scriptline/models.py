"""Scriptline data models.

The screenplay body is an ordered sequence of typed lines. ``Line`` and
``Script`` are pydantic models because they are the shapes handed to the
persistence layer; transient and computed records (title page metadata,
page statistics) live next to the code that produces them as dataclasses.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scriptline.exceptions import ValidationError


class LineType(str, Enum):
    """Screenplay element types, in editor cycling order."""

    SCENE = "scene"
    ACTION = "action"
    CHARACTER = "character"
    PARENTHETICAL = "parenthetical"
    DIALOGUE = "dialogue"
    TRANSITION = "transition"


LINE_TYPES: tuple[LineType, ...] = tuple(LineType)


def new_line_id() -> str:
    """Generate an opaque line identifier."""
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Line(BaseModel):
    """A single typed screenplay element."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_line_id, frozen=True)
    text: str = ""
    type: LineType = LineType.ACTION
    character_id: str | None = None  # weak reference, never validated here
    notes: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Accept line types case-insensitively."""
        if isinstance(v, str) and not isinstance(v, LineType):
            return v.strip().lower()
        return v


class Script(BaseModel):
    """Script container consumed by the encoder, estimator and PDF planner.

    Character and location ids are non-owning references; the store that
    owns those records is responsible for cleaning up stale ids.
    """

    id: str = Field(default_factory=new_line_id)
    title: str = "Untitled"
    description: str = ""
    author: str | None = None
    logline: str | None = None
    lines: list[Line] = Field(default_factory=list)
    character_ids: list[str] = Field(default_factory=list)
    location_ids: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("lines")
    @classmethod
    def lines_have_unique_ids(cls, v: list[Line]) -> list[Line]:
        """Reject documents in which two lines share an id."""
        try:
            check_unique_line_ids(v)
        except ValidationError as e:
            raise ValueError(e.message) from e
        return v


def check_unique_line_ids(lines: Iterable[Line]) -> None:
    """Ensure no two lines in a document share an id.

    Raises:
        ValidationError: If a duplicate id is found.
    """
    seen: dict[str, int] = {}
    for index, line in enumerate(lines):
        if line.id in seen:
            raise ValidationError(
                message=f"Duplicate line id '{line.id}'",
                hint="Every line in a document needs its own id",
                details={"first_index": seen[line.id], "duplicate_index": index},
            )
        seen[line.id] = index
