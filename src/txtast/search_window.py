"""The line window that bounds a literal-text search."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SearchWindow:
    """
    Bounds for locating the text of the next element.

    Attributes:
        min_line: First line (1-based) at which the text may start
        max_line: Last line the search may consider
        update: Whether elements converted in this window narrow it using their own line hints
        start_idx: Column at which to start searching the first line of the text
    """
    min_line: int
    max_line: int
    update: bool = True
    start_idx: int = 0

    def narrowed(self, min_line: int, max_line: int | None = None) -> 'SearchWindow':
        """
        Return a window starting at a new line, optionally with a new last line, searching from column 0.

        Args:
            min_line: The new first line
            max_line: The new last line, or None to keep the current one

        Returns:
            The new window
        """
        return replace(
            self,
            min_line=min_line,
            max_line=self.max_line if max_line is None else max_line,
            start_idx=0
        )

    def with_update(self, update: bool) -> 'SearchWindow':
        """Return this window with sibling narrowing switched on or off."""
        return replace(self, update=update)

    def from_column(self, start_idx: int) -> 'SearchWindow':
        """Return this window with the first-line search starting at a given column."""
        return replace(self, start_idx=start_idx)
