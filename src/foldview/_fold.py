"""Fold/unfold mixin for ViewerSession."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class FoldMixin:
    """Fold state over the line tree.

    Expects ``self.lines`` (list of ``Line``) and ``self.smallest_indent``.
    """

    def _fold_target(self, line_idx: int):
        """Nearest visible, foldable line at or above *line_idx*."""
        lines = self.lines
        for i in range(min(line_idx, len(lines) - 1), -1, -1):
            line = lines[i]
            if not line.hidden and line.can_fold:
                return line
        return None

    def toggle_fold(self, line_idx: int) -> None:
        """Fold or unfold the block containing *line_idx*.

        Descendants inherit the new state, except the subtrees of nested
        lines that are folded on their own: those stay hidden.
        """
        target = self._fold_target(line_idx)
        if target is None:
            return
        target.is_folded = not target.is_folded
        logger.debug(
            "line %d %s", target.index, "folded" if target.is_folded else "unfolded"
        )

        nested_depth: int | None = None
        for line in self.lines[target.index + 1 :]:
            if nested_depth is not None:
                if line.indentation > nested_depth:
                    continue
                nested_depth = None
            if line.indentation <= target.indentation:
                break
            if line.is_folded:
                nested_depth = line.indentation
            line.hidden = target.is_folded

    def set_all(self, folded: bool) -> None:
        """Fold (or unfold) everything below the top level."""
        smallest = self.smallest_indent
        for line in self.lines:
            if line.can_fold:
                line.is_folded = folded
            if line.indentation > smallest:
                line.hidden = folded
