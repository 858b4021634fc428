"""Document viewer widget."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widget import Widget

from foldview._viewport import format_row
from foldview.session import ViewerMode, ViewerSession

_CURSOR_STYLE = "reverse"
_DEBUG_STYLE = "white on black"
# Column where the search term / "Not found" starts on the status line.
_STATUS_MESSAGE_COL = 20


def _place(cells: list[str], x: int, text: str) -> None:
    """Write *text* into *cells* starting at column *x*, clipped to the row."""
    for i, ch in enumerate(text):
        col = x + i
        if 0 <= col < len(cells):
            cells[col] = ch


def status_line(session: ViewerSession, width: int) -> str:
    cells = [" "] * width
    right = f"Format: {session.format_name}"
    _place(cells, width - len(right), right)
    if session.mode == ViewerMode.SEARCHING:
        _place(cells, _STATUS_MESSAGE_COL, session.search_status_text())
    elif session.not_found:
        _place(cells, _STATUS_MESSAGE_COL, "Not found")
    _place(cells, 0, f"Line: {session.cursor_line_index + 1:,}")
    return "".join(cells)


def _debug_messages(session: ViewerSession) -> dict[int, str]:
    return {
        1: f"Size: ({session.width}, {session.height})",
        2: f"View: ({session.scroll_x}, {session.view_top})",
        3: f"Cursor: {session.cursor_row}, ({session.cursor_line_index})",
    }


def render_frame(session: ViewerSession, width: int, height: int) -> Text:
    """Draw the session into a ``width`` x ``height`` block of text."""
    session.resize(width, height)
    frame = session.frame()
    content_height = height - 2
    debug = _debug_messages(session) if session.debug else {}

    result = Text(no_wrap=True, overflow="crop")
    for row in range(content_height):
        if row < len(frame.rows):
            text = format_row(frame.rows[row], session.scroll_x, width, session.tab_size)
        else:
            text = ""
        if row == session.cursor_row and text:
            result.append(text[0], style=_CURSOR_STYLE)
            text = text[1:]
        msg = debug.get(row)
        if msg:
            used = 1 if row == session.cursor_row else 0
            result.append(text.ljust(width - used)[: max(0, width - used - len(msg))])
            result.append(msg, style=_DEBUG_STYLE)
        else:
            result.append(text)
        result.append("\n")

    result.append("─┴" + "─" * (width - 2) + "\n")
    result.append(status_line(session, width))
    return result


class DocumentViewer(Widget, can_focus=True):
    """Read-only, foldable view of a normalized document."""

    DEFAULT_CSS = """
    DocumentViewer {
        height: 1fr;
        background: $surface;
    }
    """

    @dataclass
    class Quit(Message):
        pass

    def __init__(
        self,
        session: ViewerSession,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.session = session

    def render(self) -> Text:
        width = self.content_region.width
        height = self.content_region.height
        if height < 3 or width < 10:
            return Text("(too small)")
        return render_frame(self.session, width, height)

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()

        self.session.handle_key(event)
        if self.session.quit_requested:
            self.post_message(self.Quit())
            return
        self.refresh()
