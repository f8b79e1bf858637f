"""Shared vertical-space weighting table.

Statistics, the page navigator and PDF pagination estimates all read this
one table so that they agree on page numbers for the same lines.
"""

from __future__ import annotations

import math
from typing import Protocol

from scriptline.models import LineType

LINES_PER_PAGE = 55

# Virtual line units per element, including the spacing around it
LINE_WEIGHTS: dict[LineType, float] = {
    LineType.SCENE: 2.0,
    LineType.ACTION: 1.0,
    LineType.CHARACTER: 1.5,
    LineType.PARENTHETICAL: 0.5,
    LineType.DIALOGUE: 0.8,
    LineType.TRANSITION: 1.5,
}

# Approximate characters per printed row for the wrapping elements
WRAP_WIDTHS: dict[LineType, int] = {
    LineType.ACTION: 60,
    LineType.DIALOGUE: 35,
}


class TypedText(Protocol):
    """Anything shaped like a Line for weighting purposes."""

    @property
    def type(self) -> LineType | str: ...

    @property
    def text(self) -> str: ...


def wrapped_rows(text: str, width: int) -> int:
    """Estimate printed rows for text wrapped at a fixed width, minimum 1."""
    return max(1, math.ceil(len(text) / width))


def line_weight(line: TypedText) -> float:
    """Weighted virtual lines one element occupies."""
    line_type = LineType(line.type)
    weight = LINE_WEIGHTS[line_type]
    width = WRAP_WIDTHS.get(line_type)
    if width is not None:
        weight *= wrapped_rows(line.text or "", width)
    return weight
