"""
Conversion of block metadata: ids, block titles, table attribute lists, image attributes and authors.

Ids, titles and attribute lists are written on the lines before the block they belong to, so they are
searched for backwards from the owning block's first line.
"""

import logging
from typing import List

from adoc.adoc_element import AdocDocumentHeader, AdocElement, AdocImage, AdocTable
from txtast.conversion_result import ConversionResult, Found, Omitted
from txtast.converter_config import AdocConverterConfig
from txtast.search_window import SearchWindow
from txtast.source_index import SourceIndex
from txtast.span_locator import SpanLocator
from txtast.txt_ast_node import (
    TxtASTAttributeNode, TxtASTAttributesNode, TxtASTAuthorEmailNode, TxtASTAuthorNameNode, TxtASTAuthorNode,
    TxtASTBlockTitleNode, TxtASTIDNode, TxtASTLocation, TxtASTNode, TxtASTPosition
)
from txtast.txt_ast_node_builder import TxtASTNodeBuilder


class AdocMetadataConverter:
    """Locates the metadata that accompanies AsciiDoc blocks."""

    def __init__(
        self,
        index: SourceIndex,
        locator: SpanLocator,
        builder: TxtASTNodeBuilder,
        config: AdocConverterConfig
    ) -> None:
        self._index = index
        self._locator = locator
        self._builder = builder
        self._config = config
        self._logger = logging.getLogger("AdocMetadataConverter")

    def convert_id(self, element_id: str | None, window: SearchWindow) -> ConversionResult:
        """
        Locate an element id on the lines just before (or at) the owning element.

        Args:
            element_id: The id, if the element has one
            window: The owning element's window

        Returns:
            An ID node, or Omitted when there is no id or it cannot be found
        """
        if not element_id:
            return Omitted("id", window.min_line, "element has no id")

        loc = self._locator.find_backward([element_id], window, TxtASTIDNode.NODE_TYPE, self._config.id_lookback)
        if loc is None:
            return Omitted("id", window.min_line, f"id {element_id!r} not found")

        return Found.of(self._builder.leaf_wrapper(TxtASTIDNode, element_id, loc))

    def block_title(self, element: AdocElement, window: SearchWindow) -> ConversionResult:
        """
        Locate the '.Title' line of a block.

        Args:
            element: The block
            window: The block's window

        Returns:
            A BlockTitle node, or Omitted when there is no title or it cannot be found
        """
        if not element.has_title():
            return Omitted("title", window.min_line, "element has no title")

        raw = "." + str(element.title)
        loc = self._locator.find_backward(
            [raw], window, TxtASTBlockTitleNode.NODE_TYPE, self._config.title_lookback
        )
        if loc is None:
            return Omitted("title", window.min_line, f"title {raw!r} not found")

        return Found.of(self._builder.leaf_wrapper(TxtASTBlockTitleNode, raw, loc))

    def table_attributes(self, table: AdocTable, window: SearchWindow) -> ConversionResult:
        """
        Build the attribute list of a table and anchor it on the '[' that opens the attribute line.

        Structural attributes in the denylist and attributes with empty values are left out.  The
        text is synthesized as `[name="value",...]`, so it need not match the source exactly.

        Args:
            table: The table
            window: The table's window

        Returns:
            An Attributes node, or Omitted when no attributes remain or no '[' is found
        """
        attributes = {
            name: value for name, value in table.attributes.items()
            if name not in self._config.table_attribute_denylist and value != ""
        }
        if not attributes:
            return Omitted("attributes", window.min_line, "table has no attributes to report")

        attrs = "[" + ",".join(f'{name}="{value}"' for name, value in attributes.items()) + "]"

        search = SearchWindow(max(1, window.min_line - self._config.attributes_lookback), window.min_line)
        loc = self._locator.find(["["], search, TxtASTAttributesNode.NODE_TYPE)
        if loc is None:
            return Omitted("attributes", window.min_line, "no attribute line found before table")

        line_length = len(self._index.line(loc.start.line))
        end_column = min(loc.start.column + len(attrs), line_length)
        loc = TxtASTLocation(loc.start, TxtASTPosition(loc.start.line, end_column))
        return Found.of(self._builder.leaf_wrapper(TxtASTAttributesNode, attrs, loc))

    def image_attributes(self, image: AdocImage) -> List[TxtASTNode]:
        """
        Locate the configured image attributes (by default alt, imagesdir and target) on the image line.

        Args:
            image: The image

        Returns:
            Attribute nodes for each attribute whose value appears on the image line, in document order
        """
        nodes: List[TxtASTNode] = []
        window = SearchWindow(image.lineno, image.lineno)
        for name in self._config.image_attribute_names:
            value = image.attributes.get(name)
            if not value:
                continue

            loc = self._locator.find([value], window, TxtASTAttributeNode.NODE_TYPE)
            if loc is None:
                self._logger.debug("Image attribute %s=%r not found on line %d", name, value, image.lineno)
                continue

            nodes.append(self._builder.leaf_wrapper(TxtASTAttributeNode, value, loc, name=name))

        nodes.sort(key=lambda node: node.range[0])
        return nodes

    def authors(self, header: AdocDocumentHeader) -> List[TxtASTNode]:
        """
        Locate the authors named on the author line of the document header.

        Args:
            header: The document header

        Returns:
            An Author node for each author whose name or email could be found
        """
        nodes: List[TxtASTNode] = []
        column = 0
        for author in header.authors:
            window = SearchWindow(author.lineno, author.lineno, start_idx=column)
            children: List[TxtASTNode] = []

            loc = self._locator.find([author.name], window, TxtASTAuthorNameNode.NODE_TYPE)
            if loc is not None:
                children.append(self._builder.leaf_wrapper(TxtASTAuthorNameNode, author.name, loc))
                window = window.from_column(loc.end.column)

            if author.email:
                loc = self._locator.find([author.email], window, TxtASTAuthorEmailNode.NODE_TYPE)
                if loc is not None:
                    children.append(self._builder.leaf_wrapper(TxtASTAuthorEmailNode, author.email, loc))

            if not children:
                self._logger.debug("Author %r not found on line %d", author.name, author.lineno)
                continue

            column = children[-1].loc.end.column
            nodes.append(self._builder.container(TxtASTAuthorNode, children))

        return nodes
