"""Line table and offset lookup for a source text."""

from typing import List, Tuple

from txtast.txt_ast_node import TxtASTLocation, TxtASTPosition


class SourceIndex:
    """
    Splits a source text into lines and maps (line, column) positions to absolute character offsets.

    Lines are split on '\\n' only and keep any other characters (including '\\r'), so every offset
    computed here indexes the original text exactly.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._lines: List[str] = text.split('\n')

        # _offsets[n] is the offset of the first character of line n + 1
        self._offsets: List[int] = [0]
        for line in self._lines:
            self._offsets.append(self._offsets[-1] + len(line) + 1)

    @property
    def text(self) -> str:
        """The indexed source text."""
        return self._text

    @property
    def lines(self) -> List[str]:
        """The source lines, without line terminators."""
        return self._lines

    @property
    def line_count(self) -> int:
        """The number of lines in the source."""
        return len(self._lines)

    def line(self, line_number: int) -> str:
        """
        Get a source line.

        Args:
            line_number: 1-based line number

        Returns:
            The line's content
        """
        return self._lines[line_number - 1]

    def offset_of(self, line: int, column: int) -> int:
        """
        Convert a position to an absolute character offset.

        Args:
            line: 1-based line number
            column: 0-based column within the line

        Returns:
            The 0-based offset into the source text
        """
        return self._offsets[line - 1] + column

    def position_to_offset(self, position: TxtASTPosition) -> int:
        """Convert a position to an absolute character offset."""
        return self.offset_of(position.line, position.column)

    def location_to_range(self, loc: TxtASTLocation) -> Tuple[int, int]:
        """
        Convert a location to its absolute character range.

        Args:
            loc: The location to convert

        Returns:
            The (start, end) offsets of the location
        """
        return (self.position_to_offset(loc.start), self.position_to_offset(loc.end))
