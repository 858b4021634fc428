"""Viewer state and key dispatch, independent of the terminal."""

from __future__ import annotations

from enum import Enum, auto

from foldview._fold import FoldMixin
from foldview._search import SearchMixin
from foldview._tree import NO_INDENT, build_lines
from foldview._viewport import ViewportMixin


class ViewerMode(Enum):
    VIEWING = auto()
    SEARCHING = auto()


class ViewerSession(FoldMixin, SearchMixin, ViewportMixin):
    """Document, fold state, viewport and search state of one viewer.

    Key events only need ``key`` and ``character`` attributes, so Textual's
    ``events.Key`` and plain stand-ins both work.

    VIEWING keys:
      up down left right  pageup pagedown home end
      space (fold)  f (fold all)  u (unfold all)  d (debug)
      ctrl+f (search)  ctrl+n (next match)  q escape ctrl+c (quit)
    SEARCHING keys:
      typing / backspace / enter / escape
    """

    def __init__(
        self,
        content_lines: list[str],
        *,
        format_name: str = "raw",
        tab_size: int = 2,
        width: int = 80,
        height: int = 24,
    ) -> None:
        self.tab_size: int = tab_size
        self.format_name: str = format_name
        self.lines, self.smallest_indent = build_lines(content_lines, tab_size)
        self.mode: ViewerMode = ViewerMode.VIEWING
        self.quit_requested: bool = False
        self.debug: bool = False
        # Viewport state
        self.width: int = width
        self.height: int = height
        self.cursor_row: int = 0
        self.view_top: int = 0
        self.scroll_x: int = 0
        # Search state
        self.search_term: str = ""
        self.not_found: bool = False

    @property
    def display_smallest_indent(self) -> int:
        return 0 if self.smallest_indent == NO_INDENT else self.smallest_indent

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    # -- Key handling ------------------------------------------------------

    def handle_key(self, event) -> None:
        if self.mode == ViewerMode.SEARCHING:
            self._handle_search(event)
        else:
            self._handle_viewing(event)

    def _handle_viewing(self, event) -> None:
        key = event.key
        char = event.character or ""

        if key in ("escape", "ctrl+c") or char == "q":
            self.quit_requested = True
        elif key == "up":
            self.move_up()
        elif key == "down":
            self.move_down()
        elif key == "left":
            self.scroll_left()
        elif key == "right":
            self.scroll_right()
        elif key == "pageup":
            self.page_up()
        elif key == "pagedown":
            self.page_down()
        elif key == "home":
            self.go_home()
        elif key == "end":
            self.go_end()
        elif key == "space":
            self.toggle_fold(self.cursor_line_index)
        elif key == "ctrl+f":
            self._start_search()
            return
        elif key == "ctrl+n":
            self.find_next()
            return
        elif char == "f":
            self.set_all(True)
        elif char == "u":
            self.set_all(False)
        elif char == "d":
            self.debug = not self.debug

        self.not_found = False
