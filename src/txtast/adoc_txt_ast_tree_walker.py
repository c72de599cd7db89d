"""
Walker that converts a tree of semantic AsciiDoc elements into located text AST nodes.

Elements are visited in document order.  Each element is searched for in a window that starts at its
own reported line and ends at the next sibling's reported line, so text that appears several times in
a document resolves to the occurrence that belongs to the element.  A window never starts before the
end of the previous located sibling.
"""

import logging
from typing import List

from adoc.adoc_element import (
    AdocAdmonition, AdocDescriptionList, AdocDocument, AdocElement, AdocExample, AdocImage, AdocList,
    AdocListing, AdocListItem, AdocParagraph, AdocPreamble, AdocQuote, AdocSection, AdocSidebar, AdocTable,
    AdocToc
)
from txtast.adoc_metadata_converter import AdocMetadataConverter
from txtast.adoc_table_converter import AdocTableConverter
from txtast.conversion_result import ConversionResult, Found, Omitted, flatten
from txtast.converter_config import AdocConverterConfig
from txtast.search_window import SearchWindow
from txtast.source_index import SourceIndex
from txtast.span_locator import SpanLocator
from txtast.txt_ast_errors import AdocInvalidAdmonitionError
from txtast.txt_ast_node import (
    TxtASTAdmonitionNode, TxtASTBlockQuoteNode, TxtASTCodeBlockNode, TxtASTDocumentNode, TxtASTHeaderNode,
    TxtASTImageNode, TxtASTListItemNode, TxtASTListNode, TxtASTNode, TxtASTParagraphNode, TxtASTPosition,
    TxtASTSidebarNode, TxtASTTOCNode
)
from txtast.txt_ast_node_builder import TxtASTNodeBuilder


class AdocTxtASTTreeWalker:
    """
    Converts the elements of one document.

    A walker is bound to a single source text and is not reused across documents.
    """

    def __init__(self, index: SourceIndex, config: AdocConverterConfig) -> None:
        """
        Initialize the walker.

        Args:
            index: The source text being converted
            config: Converter configuration
        """
        self._index = index
        self._config = config
        self._locator = SpanLocator(index, config.comment_marker)
        self._builder = TxtASTNodeBuilder(index)
        self._metadata = AdocMetadataConverter(index, self._locator, self._builder, config)
        self._tables = AdocTableConverter(self._locator, self._builder, self._metadata, self.convert_element_list)
        self._logger = logging.getLogger("AdocTxtASTTreeWalker")

    def convert_root(self, document: AdocDocument) -> TxtASTDocumentNode:
        """
        Convert a whole document.

        Args:
            document: The semantic document

        Returns:
            The located document node, or the canonical empty document if nothing could be located
        """
        window = SearchWindow(1, self._index.line_count)
        result = self._convert_document(document, window)
        if isinstance(result, Omitted):
            return self._builder.empty_document()

        node = result.nodes[0]
        assert isinstance(node, TxtASTDocumentNode)
        return node

    def convert_element_list(self, elements: List[AdocElement], window: SearchWindow) -> List[TxtASTNode]:
        """
        Convert a sequence of sibling elements.

        Args:
            elements: The elements, in document order
            window: The window inherited from the parent

        Returns:
            The located nodes of all the elements, in document order
        """
        results: List[ConversionResult] = []
        last_end: TxtASTPosition | None = None
        for i, element in enumerate(elements):
            if window.update:
                max_line = elements[i + 1].lineno if i + 1 < len(elements) else window.max_line
                element_window = window.narrowed(element.lineno, max_line)

            else:
                element_window = window.from_column(0)

            result = self.convert_element(element, self._after(element_window, last_end))
            if isinstance(result, Omitted):
                self._logger.debug("Omitted %s at line %d: %s", result.context, result.line, result.reason)

            else:
                last_end = max((node.loc.end for node in result.nodes), key=lambda end: (end.line, end.column))

            results.append(result)

        return flatten(results)

    def _after(self, window: SearchWindow, last_end: TxtASTPosition | None) -> SearchWindow:
        """
        Move the start of a sibling's window past the end of the previous located sibling.

        Args:
            window: The sibling's window
            last_end: Where the previous located sibling ended, if any

        Returns:
            The window, starting no earlier than last_end
        """
        if last_end is None or last_end.line < window.min_line or last_end.line > window.max_line:
            return window

        return window.narrowed(last_end.line).from_column(last_end.column)

    def convert_element(self, element: AdocElement, window: SearchWindow) -> ConversionResult:
        """
        Convert a single element.

        Args:
            element: The element
            window: The element's window

        Returns:
            The element's nodes, or Omitted

        Raises:
            AdocInvalidAdmonitionError: If an admonition has no content at all
        """
        match element:
            case AdocDocument():
                return self._convert_document(element, window)

            case AdocSection():
                return self._convert_section(element, window)

            case AdocPreamble():
                return self._nodes_of(element, self.convert_element_list(element.blocks, window))

            case AdocExample():
                return self._nodes_of(element, self.convert_element_list(element.blocks, window.with_update(False)))

            case AdocParagraph():
                return self._convert_paragraph(element, window)

            case AdocList():
                return self._convert_list(element, element.items, window)

            case AdocDescriptionList():
                items: List[AdocElement] = []
                for terms, description in element.entries:
                    items.extend(terms)
                    if description is not None:
                        items.append(description)

                return self._convert_list(element, items, window)

            case AdocListItem():
                return self._convert_list_item(element, window)

            case AdocQuote():
                return self._convert_quote(element, window)

            case AdocListing():
                return self._convert_listing(element, window)

            case AdocSidebar():
                return self._convert_sidebar(element, window)

            case AdocAdmonition():
                return self._convert_admonition(element, window)

            case AdocTable():
                return self._tables.convert_table(element, window)

            case AdocImage():
                return self._convert_image(element, window)

            case AdocToc():
                return self._convert_toc(element, window)

            case _:
                return Omitted(element.context, element.lineno, "no output node for this element kind")

    def _nodes_of(self, element: AdocElement, nodes: List[TxtASTNode]) -> ConversionResult:
        """Wrap the nodes produced for an element, or report it omitted if there are none."""
        if not nodes:
            return Omitted(element.context, element.lineno, "no content located")

        return Found(tuple(nodes))

    def _title_nodes(self, element: AdocElement, window: SearchWindow) -> List[TxtASTNode]:
        """Return the element's BlockTitle node as a list, or an empty list."""
        return flatten([self._metadata.block_title(element, window)])

    def _convert_document(self, document: AdocDocument, window: SearchWindow) -> ConversionResult:
        children = self.convert_element_list(document.blocks, window)

        header = document.header
        if header is not None:
            header_window = window.narrowed(header.lineno)
            head = flatten([
                self._metadata.convert_id(document.id, header_window),
                self._convert_title(header.title or "", header.level, header_window)
            ])
            if self._config.include_authors:
                head.extend(self._metadata.authors(header))

            children = head + children

        if not children:
            return Omitted(document.context, document.lineno, "document has no located content")

        return Found.of(self._builder.document(children))

    def _convert_title(self, title: str, level: int, window: SearchWindow) -> ConversionResult:
        """
        Locate a document or section title.

        Args:
            title: The title text
            level: The section level (0 for the document title)
            window: The window starting at the title's line

        Returns:
            A Header node, or Omitted if the title is not found
        """
        loc = self._locator.find([title], window, TxtASTHeaderNode.NODE_TYPE)
        if loc is None:
            return Omitted("header", window.min_line, f"title {title!r} not found")

        children: List[TxtASTNode] = [self._builder.text(title, loc)]
        return Found.of(self._builder.located(TxtASTHeaderNode, title, loc, children, depth=level + 1))

    def _convert_section(self, section: AdocSection, window: SearchWindow) -> ConversionResult:
        """Convert a section into [ID?, Header, ...blocks]; a section whose title is not found is dropped."""
        header = self._convert_title(section.title or "", section.level, window)
        if isinstance(header, Omitted):
            return Omitted(section.context, section.lineno, header.reason)

        nodes = flatten([self._metadata.convert_id(section.id, window), header])
        nodes.extend(self.convert_element_list(section.blocks, window))
        return Found(tuple(nodes))

    def _create_paragraph(self, text: str, window: SearchWindow) -> ConversionResult:
        """
        Locate a piece of text and wrap it as a paragraph.

        Args:
            text: The text, possibly spanning several lines
            window: The window to search

        Returns:
            A Paragraph node holding a single Str, or Omitted
        """
        loc = self._locator.find(text.split('\n'), window, TxtASTParagraphNode.NODE_TYPE)
        if loc is None:
            return Omitted("paragraph", window.min_line, f"text {text!r} not found")

        children: List[TxtASTNode] = [self._builder.text(text, loc)]
        return Found.of(self._builder.located(TxtASTParagraphNode, text, loc, children))

    def _convert_paragraph(self, paragraph: AdocParagraph, window: SearchWindow) -> ConversionResult:
        raw = paragraph.source
        loc = self._locator.find(paragraph.lines, window, TxtASTParagraphNode.NODE_TYPE)
        if loc is None:
            return Omitted(paragraph.context, paragraph.lineno, "paragraph text not found")

        children = self._title_nodes(paragraph, window)
        children.append(self._builder.text(raw, loc))
        return Found.of(self._builder.container(TxtASTParagraphNode, children, raw))

    def _convert_list(self, element: AdocElement, items: List[AdocElement], window: SearchWindow) -> ConversionResult:
        """
        Convert an ordered, unordered, callout or description list.

        List items report exact lines, so the items narrow their windows even inside containers that
        switch narrowing off.
        """
        children = self.convert_element_list(items, window.with_update(True))
        if not children:
            return Omitted(element.context, element.lineno, "no list items located")

        children = self._title_nodes(element, window) + children
        return Found.of(self._builder.container(TxtASTListNode, children))

    def _convert_list_item(self, item: AdocListItem, window: SearchWindow) -> ConversionResult:
        children: List[TxtASTNode] = []
        if item.has_text():
            children.extend(flatten([self._create_paragraph(str(item.text), window)]))

        children.extend(self.convert_element_list(item.blocks, window))
        if not children:
            return Omitted(item.context, item.lineno, "list item has no located content")

        return Found.of(self._builder.container(TxtASTListItemNode, children))

    def _convert_quote(self, quote: AdocQuote, window: SearchWindow) -> ConversionResult:
        # Quoted content is searched across the whole quote window
        children = self.convert_element_list(quote.blocks, window.with_update(False))
        if not children:
            return Omitted(quote.context, quote.lineno, "quote has no located content")

        return Found.of(self._builder.container(TxtASTBlockQuoteNode, children))

    def _convert_listing(self, listing: AdocListing, window: SearchWindow) -> ConversionResult:
        loc = self._locator.find(listing.lines, window, TxtASTCodeBlockNode.NODE_TYPE)
        if loc is None:
            return Omitted(listing.context, listing.lineno, "code not found")

        children = self._title_nodes(listing, window)
        span = self._builder.union_location([loc] + [child.loc for child in children])
        return Found.of(self._builder.located(TxtASTCodeBlockNode, listing.source, span, children, lang=listing.language))

    def _convert_sidebar(self, sidebar: AdocSidebar, window: SearchWindow) -> ConversionResult:
        children = self.convert_element_list(sidebar.blocks, window)
        if not children:
            return Omitted(sidebar.context, sidebar.lineno, "sidebar has no located content")

        children = self._title_nodes(sidebar, window) + children
        return Found.of(self._builder.container(TxtASTSidebarNode, children))

    def _convert_admonition(self, admonition: AdocAdmonition, window: SearchWindow) -> ConversionResult:
        if admonition.has_blocks():
            children = self.convert_element_list(admonition.blocks, window)

        else:
            if not admonition.lines or not admonition.lines[0]:
                raise AdocInvalidAdmonitionError(
                    "Found an admonition without a block and without a paragraph", window.min_line
                )

            children = flatten([self._create_paragraph("\n".join(admonition.lines), window)])

        if not children:
            return Omitted(admonition.context, admonition.lineno, "admonition has no located content")

        children = self._title_nodes(admonition, window) + children
        return Found.of(self._builder.container(TxtASTAdmonitionNode, children, style=admonition.style))

    def _convert_image(self, image: AdocImage, window: SearchWindow) -> ConversionResult:
        raw = self._index.line(image.lineno)
        loc = self._locator.find([raw], window, TxtASTImageNode.NODE_TYPE)
        if loc is None:
            return Omitted(image.context, image.lineno, "image line not found")

        children = self._title_nodes(image, window)
        children.extend(self._metadata.image_attributes(image))
        children.append(self._builder.text(raw, loc))
        span = self._builder.union_location([child.loc for child in children])
        return Found.of(self._builder.located(TxtASTImageNode, raw, span, children))

    def _convert_toc(self, toc: AdocToc, window: SearchWindow) -> ConversionResult:
        raw = self._index.line(toc.lineno)
        loc = self._locator.find([raw], window, TxtASTTOCNode.NODE_TYPE)
        if loc is None:
            return Omitted(toc.context, toc.lineno, "toc line not found")

        return Found.of(self._builder.leaf_wrapper(TxtASTTOCNode, raw, loc))
