"""Viewport and cursor mixin for ViewerSession."""

from __future__ import annotations

from dataclasses import dataclass, field

from foldview._tree import Line

# Rows taken by the border and the status line.
CHROME_ROWS = 2
# Columns taken by the fold glyph and the separator.
GUTTER_WIDTH = 2


@dataclass
class Frame:
    """Lines mapped onto window rows for one render pass."""

    rows: list[Line] = field(default_factory=list)
    longest: int = -1  # full length of the longest rendered line

    @property
    def last_row(self) -> int:
        return len(self.rows) - 1


def fold_glyph(line: Line) -> str:
    if not line.can_fold:
        return " "
    return "+" if line.is_folded else "-"


def format_row(line: Line, scroll_x: int, width: int, tab_size: int) -> str:
    """Gutter plus the content windowed at *scroll_x*, ellipsis-truncated."""
    available = width - GUTTER_WIDTH
    content = line.content
    if len(content) - scroll_x > available:
        text = content[scroll_x : scroll_x + available - 3] + "..."
    elif len(content) > scroll_x:
        text = content[scroll_x:]
    else:
        text = ""
    return fold_glyph(line) + "│" + text.replace("\t", " " * tab_size)


class ViewportMixin:
    """Cursor, scroll and layout state.

    Expects ``self.lines``, ``self.width``, ``self.height``,
    ``self.cursor_row``, ``self.view_top`` and ``self.scroll_x``.
    """

    def _visible_rows(self) -> int:
        return max(1, self.height - CHROME_ROWS)

    def _max_view_top(self) -> int:
        return max(0, len(self.lines) - self._visible_rows())

    def _layout(self) -> Frame:
        frame = Frame()
        rows = self._visible_rows()
        lines = self.lines
        idx = self.view_top
        while len(frame.rows) < rows and idx < len(lines):
            line = lines[idx]
            idx += 1
            if line.hidden:
                continue
            frame.rows.append(line)
            if len(line.content) > frame.longest:
                frame.longest = len(line.content)
        return frame

    def frame(self) -> Frame:
        """Lay out the window, correcting cursor and scroll as needed."""
        while True:
            frame = self._layout()
            moved = self.cursor_row > 0 or self.view_top > 0 or self.scroll_x > 0
            if moved and frame.last_row < self.cursor_row:
                # folding pulled the rows out from under the cursor
                self.scroll_x = 0
                self.view_top = 0
                self.cursor_row = 0
                continue
            if frame.longest - self.scroll_x + 2 < self.width and self.scroll_x > 0:
                self.scroll_x = max(0, frame.longest - self.width + 2)
                continue
            return frame

    @property
    def cursor_line_index(self) -> int:
        """Logical index of the line on the cursor row."""
        last = 0
        row = 0
        for line in self.lines[self.view_top :]:
            if line.hidden:
                continue
            if row == self.cursor_row:
                return line.index
            last = line.index
            row += 1
        return last

    # -- Movement ----------------------------------------------------------

    def move_up(self) -> None:
        self.cursor_row -= 1
        if self.cursor_row >= 0:
            return
        self.cursor_row = 0
        lines = self.lines
        self.view_top -= 1
        while self.view_top >= 0 and lines[self.view_top].hidden:
            self.view_top -= 1
        if self.view_top < 0:
            self.view_top = 0

    def move_down(self) -> None:
        rows = self._visible_rows()
        lines = self.lines
        self.cursor_row += 1
        if self.cursor_row >= rows:
            self.cursor_row = rows - 1
            self.view_top += 1
            while self.view_top < len(lines) and lines[self.view_top].hidden:
                self.view_top += 1
            self.view_top = min(self.view_top, self._max_view_top())
        last_row = self._layout().last_row
        if self.cursor_row > last_row:
            self.cursor_row = max(0, last_row)

    def page_up(self) -> None:
        for _ in range(self._visible_rows()):
            self.move_up()

    def page_down(self) -> None:
        for _ in range(self._visible_rows()):
            self.move_down()

    def go_home(self) -> None:
        self.view_top = 0
        self.cursor_row = 0

    def go_end(self) -> None:
        self.view_top = self._max_view_top()
        self.cursor_row = max(0, self._layout().last_row)

    def scroll_left(self) -> None:
        self.scroll_x = max(0, self.scroll_x - 1)

    def scroll_right(self) -> None:
        self.scroll_x += 1

    def _scroll_to_line(self, line_idx: int) -> None:
        """Put *line_idx* at the top of the window, or as close as clamping allows."""
        top = min(line_idx, self._max_view_top())
        self.view_top = top
        self.cursor_row = sum(1 for line in self.lines[top:line_idx] if not line.hidden)
