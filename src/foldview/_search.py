"""Search mixin for ViewerSession."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# Columns reserved on the status line around the search term.
_STATUS_RESERVED = 48


class SearchMixin:
    """Search-related methods for ViewerSession."""

    def _handle_search(self, event) -> None:
        key = event.key
        char = event.character

        if key == "escape":
            from foldview.session import ViewerMode

            self.mode = ViewerMode.VIEWING
        elif key == "backspace":
            if self.search_term:
                self.search_term = self.search_term[:-1]
            else:
                from foldview.session import ViewerMode

                self.mode = ViewerMode.VIEWING
        elif key == "enter":
            from foldview.session import ViewerMode

            self.mode = ViewerMode.VIEWING
            self.find_next()
            return
        elif char and char.isprintable():
            self.search_term += char
            return

        self.not_found = False

    def _start_search(self) -> None:
        """Enter search mode; a failed search leaves nothing to resume."""
        from foldview.session import ViewerMode

        self.mode = ViewerMode.SEARCHING
        if self.not_found:
            self.search_term = ""
            self.not_found = False

    def find_next(self) -> bool:
        """Jump to the next line containing the search term.

        Starts after the cursor line, or from the top when the previous
        search came up empty. Returns False and sets ``not_found`` when
        nothing matched.
        """
        start = 0 if self.not_found else self.cursor_line_index + 1
        needle = self.search_term.lower()
        for line in self.lines[start:]:
            if needle in line.content.lower():
                self._reveal_line(line.index)
                self._scroll_to_line(line.index)
                self.not_found = False
                logger.debug("search %r matched line %d", self.search_term, line.index)
                return True
        self.not_found = True
        logger.debug("search %r not found from line %d", self.search_term, start)
        return False

    def _reveal_line(self, line_idx: int) -> None:
        """Unfold the folded ancestors of *line_idx* until it is visible."""
        lines = self.lines
        target = lines[line_idx]
        while target.hidden:
            unfolded = False
            depth = target.indentation
            for i in range(line_idx - 1, -1, -1):
                line = lines[i]
                if line.indentation >= depth:
                    continue
                depth = line.indentation
                if line.is_folded and not line.hidden:
                    self.toggle_fold(i)
                    unfolded = True
                if depth <= self.smallest_indent:
                    break
            if not unfolded:
                break

    def search_status_text(self) -> str:
        """The search term as shown on the status line."""
        term = self.search_term
        available = max(0, self.width - _STATUS_RESERVED)
        if len(term) > available:
            term = "..." + (term[-available:] if available else "")
        return f"Search: {term}▏"
