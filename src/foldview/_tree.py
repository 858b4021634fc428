"""Indentation-keyed line tree."""

from __future__ import annotations

import sys
from dataclasses import dataclass

# smallest_indent of an empty document
NO_INDENT: int = sys.maxsize


@dataclass
class Line:
    """One row of the normalized document."""

    content: str
    indentation: int
    index: int
    can_fold: bool = False  # next line is indented deeper
    is_folded: bool = False
    hidden: bool = False  # covered by a folded ancestor


def measure_indentation(text: str, tab_size: int) -> int:
    """Count leading whitespace columns; a tab is always *tab_size* wide."""
    indent = 0
    for ch in text:
        if ch == " ":
            indent += 1
        elif ch == "\t":
            indent += tab_size
        else:
            break
    return indent


def build_lines(texts: list[str], tab_size: int) -> tuple[list[Line], int]:
    """Turn formatted text lines into ``(lines, smallest_indent)``.

    A line can fold when the line right after it is indented deeper, so the
    last line never folds. ``smallest_indent`` is ``NO_INDENT`` for an empty
    input.
    """
    lines: list[Line] = []
    smallest = NO_INDENT
    prev: Line | None = None
    for i, text in enumerate(texts):
        indent = measure_indentation(text, tab_size)
        if prev is not None:
            prev.can_fold = prev.indentation < indent
        if indent < smallest:
            smallest = indent
        prev = Line(content=text, indentation=indent, index=i)
        lines.append(prev)
    return lines, smallest
