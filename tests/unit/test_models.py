"""Tests for the line and script models."""

import pydantic
import pytest

from scriptline.exceptions import ValidationError
from scriptline.models import (
    LINE_TYPES,
    Line,
    LineType,
    Script,
    check_unique_line_ids,
)


class TestLine:
    """Test the Line model."""

    def test_defaults(self):
        """Test default values."""
        line = Line()
        assert line.text == ""
        assert line.type is LineType.ACTION
        assert line.character_id is None
        assert line.notes is None
        assert len(line.id) == 36

    def test_ids_are_unique(self):
        """Test that each line gets a fresh id."""
        assert len({Line().id for _ in range(50)}) == 50

    def test_type_is_case_insensitive(self):
        """Test that type strings are normalized."""
        assert Line(type="Scene").type is LineType.SCENE
        assert Line(type=" DIALOGUE ").type is LineType.DIALOGUE

    def test_unknown_type_rejected(self):
        """Test that unknown types fail validation."""
        with pytest.raises(pydantic.ValidationError):
            Line(type="montage")

    def test_text_and_type_mutable(self):
        """Test that text and type can change after creation."""
        line = Line(text="a")
        line.text = "b"
        line.type = "character"
        assert (line.text, line.type) == ("b", LineType.CHARACTER)

    def test_id_is_frozen(self):
        """Test that ids cannot be reassigned."""
        line = Line()
        with pytest.raises(pydantic.ValidationError):
            line.id = "other"

    def test_line_types_order(self):
        """Test the cycling order of line types."""
        assert [t.value for t in LINE_TYPES] == [
            "scene",
            "action",
            "character",
            "parenthetical",
            "dialogue",
            "transition",
        ]


class TestScript:
    """Test the Script container."""

    def test_defaults(self):
        """Test default values."""
        script = Script()
        assert script.title == "Untitled"
        assert script.description == ""
        assert script.author is None
        assert script.logline is None
        assert script.lines == []
        assert script.character_ids == []
        assert script.created_at.tzinfo is not None

    def test_duplicate_line_ids_rejected(self):
        """Test that two lines may not share an id."""
        line = Line(text="a")
        twin = Line(id=line.id, text="b")
        with pytest.raises(pydantic.ValidationError, match="Duplicate line id"):
            Script(lines=[line, twin])

    def test_weak_references_not_validated(self):
        """Test that character ids are stored without lookup."""
        line = Line(type=LineType.CHARACTER, text="JOHN", character_id="missing")
        script = Script(lines=[line], character_ids=["missing"])
        assert script.lines[0].character_id == "missing"


class TestCheckUniqueLineIds:
    """Test the duplicate id check."""

    def test_unique(self):
        """Test that unique ids pass."""
        check_unique_line_ids([Line(), Line()])

    def test_duplicate(self):
        """Test the error details for duplicates."""
        line = Line()
        with pytest.raises(ValidationError) as exc_info:
            check_unique_line_ids([line, Line(), Line(id=line.id)])
        assert exc_info.value.details == {"first_index": 0, "duplicate_index": 2}
        assert exc_info.value.hint
