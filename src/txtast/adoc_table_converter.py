"""
Conversion of AsciiDoc tables.

Several cells often share one source line, so each cell's search starts where the previous cell on the
same line ended; otherwise two cells with the same text would both resolve to the first one.
"""

from typing import Callable, List

from adoc.adoc_element import AdocElement, AdocTable, AdocTableCell
from txtast.adoc_metadata_converter import AdocMetadataConverter
from txtast.conversion_result import ConversionResult, Found, Omitted
from txtast.search_window import SearchWindow
from txtast.span_locator import SpanLocator
from txtast.txt_ast_node import TxtASTNode, TxtASTPosition, TxtASTTableCellNode, TxtASTTableNode, TxtASTTableRowNode
from txtast.txt_ast_node_builder import TxtASTNodeBuilder


BlockConverter = Callable[[List[AdocElement], SearchWindow], List[TxtASTNode]]


class AdocTableConverter:
    """Converts tables, rows and cells."""

    def __init__(
        self,
        locator: SpanLocator,
        builder: TxtASTNodeBuilder,
        metadata: AdocMetadataConverter,
        convert_blocks: BlockConverter
    ) -> None:
        """
        Initialize the table converter.

        Args:
            locator: Span locator for the source
            builder: Node builder for the source
            metadata: Converter for the table's title and attribute list
            convert_blocks: Converts the blocks of an AsciiDoc-style cell's inner document
        """
        self._locator = locator
        self._builder = builder
        self._metadata = metadata
        self._convert_blocks = convert_blocks

    def convert_table(self, table: AdocTable, window: SearchWindow) -> ConversionResult:
        """
        Convert a table: its title, its attribute list, then its header and body rows.

        Args:
            table: The table
            window: The table's window

        Returns:
            A Table node, or Omitted if nothing in the table could be located
        """
        children: List[TxtASTNode] = []

        for result in (self._metadata.block_title(table, window), self._metadata.table_attributes(table, window)):
            if isinstance(result, Found):
                children.extend(result.nodes)

        last_end: TxtASTPosition | None = None
        for row in table.head_rows + table.body_rows:
            if not row:
                continue

            # Each row starts searching at its first cell's line, so an earlier row with the
            # same text can't be matched.  A row may start on the line where the previous one ended.
            start_idx = last_end.column if last_end is not None and last_end.line == row[0].lineno else 0
            row_window = SearchWindow(row[0].lineno, window.max_line, False, start_idx)
            result = self.convert_row(row, row_window)
            if isinstance(result, Found):
                children.extend(result.nodes)
                last_end = result.nodes[-1].loc.end

        if not children:
            return Omitted(table.context, table.lineno, "no cells located")

        return Found.of(self._builder.container(TxtASTTableNode, children))

    def convert_row(self, row: List[AdocTableCell], window: SearchWindow) -> ConversionResult:
        """
        Convert one table row.

        Args:
            row: The cells of the row
            window: The row's window; start_idx skips a previous row ending on the first cell's line

        Returns:
            A TableRow node, or Omitted if none of its cells could be located
        """
        cells: List[TxtASTNode] = []
        last_end = TxtASTPosition(window.min_line, window.start_idx)
        for cell in row:
            start_idx = last_end.column if last_end.line == cell.lineno else 0

            cell_window = SearchWindow(cell.lineno, window.max_line, window.update, start_idx)
            result = self.convert_cell(cell, cell_window)
            if isinstance(result, Found):
                cells.extend(result.nodes)
                last_end = cells[-1].loc.end

        if not cells:
            return Omitted("table_row", row[0].lineno, "no cells located")

        return Found.of(self._builder.container(TxtASTTableRowNode, cells))

    def convert_cell(self, cell: AdocTableCell, window: SearchWindow) -> ConversionResult:
        """
        Convert one table cell.

        Args:
            cell: The cell
            window: The cell's window; start_idx skips cells already matched on the same line

        Returns:
            A TableCell node, or Omitted if the cell text could not be found
        """
        loc = self._locator.find(cell.text.split('\n'), window, TxtASTTableCellNode.NODE_TYPE)
        if loc is None:
            return Omitted(cell.context, cell.lineno, f"cell text {cell.text!r} not found")

        if cell.style == "asciidoc" and cell.inner_document is not None:
            inner_window = window.narrowed(cell.lineno).with_update(True)
            children = self._convert_blocks(cell.inner_document.blocks, inner_window)

        else:
            children = [self._builder.text(cell.text, loc)]

        return Found.of(self._builder.located(TxtASTTableCellNode, cell.text, loc, children))
