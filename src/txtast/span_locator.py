"""
Recovery of exact source spans from literal text.

The semantic parser only knows roughly where an element starts.  The locator finds the exact span by
matching the element's literal lines, in order, against consecutive source lines inside a search window.
"""

import logging
from typing import List

from txtast.search_window import SearchWindow
from txtast.source_index import SourceIndex
from txtast.txt_ast_node import TxtASTCodeBlockNode, TxtASTLocation, TxtASTPosition


class SpanLocator:
    """Finds the location of literal text lines within a window of source lines."""

    def __init__(self, index: SourceIndex, comment_marker: str = "//") -> None:
        """
        Initialize the locator.

        Args:
            index: The source being searched
            comment_marker: Prefix of the comment lines that text searches skip over
        """
        self._index = index
        self._comment_marker = comment_marker
        self._logger = logging.getLogger("SpanLocator")

    def _is_comment(self, line_number: int) -> bool:
        """Return True if a (1-based) source line exists and is a comment line."""
        if line_number < 1 or line_number > self._index.line_count:
            return False

        return self._index.line(line_number).startswith(self._comment_marker)

    def find(self, lines: List[str], window: SearchWindow, kind: str) -> TxtASTLocation | None:
        """
        Find the first place in the window where the given lines occur on consecutive source lines.

        Comment lines between (or before) the matched lines are skipped, except for code blocks,
        whose content may legitimately look like comments.

        Args:
            lines: The literal text segments, one per source line
            window: The search window; start_idx applies to the first segment on the first line only
            kind: The node type being located

        Returns:
            The location of the match, or None if the text does not occur in the window
        """
        if not lines:
            return None

        skip_comments = kind != TxtASTCodeBlockNode.NODE_TYPE
        first = max(1, window.min_line)
        last = min(window.max_line, self._index.line_count) - len(lines) + 1

        for i in range(first, last + 1):
            # Only the window's first line is searched from start_idx
            search_start = window.start_idx if i == first else 0
            offset = 0
            found = True
            for j, segment in enumerate(lines):
                if skip_comments:
                    while self._is_comment(i + j + offset):
                        offset += 1

                line_number = i + j + offset
                if line_number > self._index.line_count:
                    found = False
                    break

                search_from = search_start if j == 0 else 0
                if self._index.line(line_number).find(segment, search_from) == -1:
                    found = False
                    break

            if not found:
                continue

            # A comment line at the start of the window is reported from column 0
            column = self._index.line(i).find(lines[0], search_start)
            if column == -1:
                column = 0

            end_line = i + len(lines) - 1 + offset
            last_segment = lines[-1]
            end_search_from = search_start if len(lines) == 1 else 0
            end_column = self._index.line(end_line).find(last_segment, end_search_from) + len(last_segment)

            return TxtASTLocation(TxtASTPosition(i, column), TxtASTPosition(end_line, end_column))

        return None

    def find_backward(
        self,
        lines: List[str],
        window: SearchWindow,
        kind: str,
        lookback: int
    ) -> TxtASTLocation | None:
        """
        Find text that precedes the window's first line by at most `lookback` lines.

        Each candidate start line i, from window.min_line - 1 down to max(1, window.min_line - lookback),
        is tried with a forward search over [i, window.min_line]; the first match wins.

        Args:
            lines: The literal text segments
            window: The window of the element that owns the text
            kind: The node type being located
            lookback: The maximum number of lines to look back

        Returns:
            The location of the match, or None if it was not found
        """
        for i in range(window.min_line - 1, max(1, window.min_line - lookback) - 1, -1):
            loc = self.find(lines, SearchWindow(i, window.min_line, window.update, window.start_idx), kind)
            if loc is not None:
                return loc

        self._logger.debug("No match for %r within %d lines before line %d", lines, lookback, window.min_line)
        return None
