"""Tests for fixed-format PDF page layout."""

import pytest

from scriptline.layout.pdf_layout import (
    ELEMENT_MARGINS,
    PAGE,
    chars_per_row,
    column_width,
    display_text,
    element_height,
    plan_pdf_layout,
    spacing_after,
    wrap_rows,
)
from scriptline.models import Line, LineType, Script


def body_items(layout, page=0):
    """Body items on a page, page numbers excluded."""
    return [item for item in layout.pages[page] if item.y >= PAGE.margin_top]


class TestGeometry:
    """Test the margin table and derived widths."""

    def test_page(self):
        """Test US Letter with screenplay margins."""
        assert (PAGE.width, PAGE.height) == (612, 792)
        assert PAGE.text_width == 432
        assert PAGE.bottom_limit == 720

    @pytest.mark.parametrize(
        ("line_type", "width"),
        [
            (LineType.SCENE, 432),
            (LineType.ACTION, 432),
            (LineType.CHARACTER, 264),
            (LineType.PARENTHETICAL, 168),
            (LineType.DIALOGUE, 216),
            (LineType.TRANSITION, 144),
        ],
    )
    def test_column_width(self, line_type, width):
        """Test printable width per element."""
        assert column_width(line_type) == width

    def test_caps_elements(self):
        """Test which elements print in capitals."""
        caps = {t for t, margins in ELEMENT_MARGINS.items() if margins.caps}
        assert caps == {LineType.SCENE, LineType.CHARACTER, LineType.TRANSITION}

    def test_chars_per_row(self):
        """Test Courier 12pt row capacity."""
        assert chars_per_row(column_width(LineType.ACTION)) == 60
        assert chars_per_row(column_width(LineType.DIALOGUE)) == 30

    def test_wrap_rows(self):
        """Test word wrapping at the column width."""
        rows = wrap_rows("word " * 30, column_width(LineType.ACTION))
        assert len(rows) == 3
        assert all(len(row) <= 60 for row in rows)
        assert wrap_rows("   ", 432) == []

    def test_display_text(self):
        """Test that caps elements are uppercased for printing."""
        assert display_text(Line(type=LineType.CHARACTER, text="john")) == "JOHN"
        assert display_text(Line(type=LineType.ACTION, text="john")) == "john"


class TestSpacing:
    """Test vertical spacing rules."""

    def test_spacing_after(self):
        """Test the spacing after each element type."""
        assert spacing_after(LineType.SCENE) == 24
        assert spacing_after(LineType.TRANSITION) == 24
        assert spacing_after(LineType.ACTION) == 12
        assert spacing_after(LineType.CHARACTER) == 0
        assert spacing_after(LineType.PARENTHETICAL) == 0
        assert spacing_after(LineType.DIALOGUE) == 12
        assert spacing_after(LineType.DIALOGUE, LineType.ACTION) == 12
        assert spacing_after(LineType.DIALOGUE, LineType.DIALOGUE) == 0
        assert spacing_after(LineType.DIALOGUE, LineType.PARENTHETICAL) == 0

    def test_element_height(self):
        """Test rows plus trailing space."""
        assert element_height(Line(type=LineType.SCENE, text="INT. A")) == 36
        assert element_height(Line(type=LineType.ACTION, text="x")) == 24
        assert element_height(Line(type=LineType.ACTION, text="")) == 0


class TestPlanPdfLayout:
    """Test page planning."""

    def test_title_page(self):
        """Test title page content and placement."""
        script = Script(title="The Heist", author="Jane", logline="One last job.")
        layout = plan_pdf_layout(script)

        texts = [item.text for item in layout.pages[0]]
        assert texts == ["THE HEIST", "written by", "Jane", "One last job."]
        title, credit, author, logline = layout.pages[0]
        assert title.y == PAGE.height / 3
        assert title.font_size == 24
        assert all(item.align == "center" for item in layout.pages[0])
        assert credit.y == title.y + 24 + 24
        assert author.y == credit.y + 24
        assert logline.y == PAGE.height - 200
        assert logline.font_size == 10

    def test_anonymous_author(self):
        """Test the fallback author name."""
        layout = plan_pdf_layout(Script(title="T"))
        assert "Anonymous" in [item.text for item in layout.pages[0]]

    def test_empty_script(self):
        """Test a script with no lines still yields one body page."""
        layout = plan_pdf_layout(Script(), include_title_page=False)
        assert layout.page_count == 1
        assert [item.text for item in layout.pages[0]] == ["1."]

    def test_body_positions(self):
        """Test x offsets, capitals and dialogue spacing."""
        script = Script(
            lines=[
                Line(type=LineType.SCENE, text="int. office - day"),
                Line(type=LineType.CHARACTER, text="john"),
                Line(type=LineType.DIALOGUE, text="Hi."),
                Line(type=LineType.DIALOGUE, text="Again."),
                Line(type=LineType.TRANSITION, text="cut to:"),
            ]
        )
        layout = plan_pdf_layout(script, include_title_page=False)
        scene, cue, first, second, transition = body_items(layout)

        assert (scene.x, scene.y, scene.text) == (108, 72, "INT. OFFICE - DAY")
        assert (cue.x, cue.y, cue.text) == (276, 108, "JOHN")
        assert (first.x, first.y) == (180, 120)
        assert second.y == 132
        assert (transition.x, transition.y) == (396, 156)
        assert transition.align == "right"
        assert transition.text == "CUT TO:"

    def test_blank_lines_take_no_space(self):
        """Test that empty elements are skipped."""
        script = Script(
            lines=[
                Line(type=LineType.ACTION, text=""),
                Line(type=LineType.ACTION, text="Visible."),
            ]
        )
        (item,) = body_items(plan_pdf_layout(script, include_title_page=False))
        assert item.y == 72

    def test_page_overflow(self):
        """Test that elements that do not fit start a new page."""
        lines = [Line(type=LineType.ACTION, text=f"Beat {n}.") for n in range(28)]
        layout = plan_pdf_layout(Script(lines=lines))

        assert layout.has_title_page
        assert layout.page_count == 3
        assert layout.body_page_count == 2
        assert len(body_items(layout, 1)) == 27
        (carried,) = body_items(layout, 2)
        assert carried.text == "Beat 27."
        assert carried.y == 72
        assert carried.page == 2

    def test_page_numbers(self):
        """Test that body pages are numbered from 1, title page excluded."""
        lines = [Line(type=LineType.ACTION, text=f"Beat {n}.") for n in range(28)]
        layout = plan_pdf_layout(Script(lines=lines))

        numbers = [
            item
            for page in layout.pages
            for item in page
            if item.y < PAGE.margin_top
        ]
        assert [(n.page, n.text) for n in numbers] == [(1, "1."), (2, "2.")]
        assert numbers[0].x == 612 - 72 - 50
        assert numbers[0].align == "right"

    def test_without_page_numbers(self):
        """Test turning page numbers off."""
        layout = plan_pdf_layout(
            Script(lines=[Line(type=LineType.ACTION, text="x")]),
            include_title_page=False,
            include_page_numbers=False,
        )
        assert all(item.y >= PAGE.margin_top for item in layout.pages[0])

    def test_long_action_wraps(self):
        """Test that long action spans several rows on one element."""
        script = Script(lines=[Line(type=LineType.ACTION, text="word " * 30)])
        items = body_items(plan_pdf_layout(script, include_title_page=False))
        assert [item.y for item in items] == [72, 84, 96]

    def test_oversized_element_flows_to_next_page(self):
        """Test that an element taller than the body area continues overleaf."""
        text = "word " * 800
        rows = wrap_rows(text, column_width(LineType.ACTION))
        script = Script(lines=[Line(type=LineType.ACTION, text=text)])
        layout = plan_pdf_layout(script, include_title_page=False)

        first, second = body_items(layout, 0), body_items(layout, 1)
        assert layout.page_count == 2
        assert len(first) == 54
        assert len(first) + len(second) == len(rows)
        assert second[0].y == PAGE.margin_top
        assert second[0].page == 1
        assert all(
            item.y + 12 <= PAGE.bottom_limit for page in layout.pages for item in page
        )
