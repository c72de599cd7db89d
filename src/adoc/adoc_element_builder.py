"""
Builder that turns AsciiDoc source text into a tree of semantic elements.

The builder works line by line over the tokens produced by the AdocLexer, keeping track of which container
(document, section, delimited block, list item or table cell) the current line belongs to.  It records the
line on which every element starts, but not exact columns: recovering exact positions is the job of the
location engine.
"""

import logging
import os
import re
from typing import Dict, List, Tuple

from adoc.adoc_attribute_list import AdocAttributeList
from adoc.adoc_element import (
    AdocAdmonition, AdocAuthor, AdocDescriptionList, AdocDocument, AdocDocumentHeader, AdocElement,
    AdocExample, AdocImage, AdocList, AdocListing, AdocListItem, AdocParagraph, AdocPreamble, AdocQuote,
    AdocSection, AdocSidebar, AdocTable, AdocTableCell, AdocToc, AdocUnhandledElement
)
from adoc.adoc_lexer import AdocLexer
from adoc.adoc_token import AdocToken, AdocTokenType


class AdocParseError(Exception):
    """Exception raised when the builder is used incorrectly or meets input it cannot represent."""
    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"{message}: line {line}")
        self.message: str = message
        self.line: int = line


class AdocBlockMetadata:
    """Block title, anchor and attribute lines waiting to be attached to the next block."""

    def __init__(self) -> None:
        self.title: str | None = None
        self.id: str | None = None
        self.attributes: Dict[str, str] = {}

    def is_empty(self) -> bool:
        """Return True if no metadata has been collected."""
        return self.title is None and self.id is None and not self.attributes

    @property
    def style(self) -> str | None:
        """The block style given by the first positional attribute, if any."""
        return self.attributes.get("style")

    def apply(self, element: AdocElement) -> None:
        """
        Attach the collected metadata to an element.

        Args:
            element: The element the metadata belongs to
        """
        if self.title is not None:
            element.title = self.title

        if self.id is not None:
            element.id = self.id

        element.attributes.update(self.attributes)


_LIST_ITEM_TYPES: Tuple[AdocTokenType, ...] = (
    AdocTokenType.ULIST_ITEM, AdocTokenType.OLIST_ITEM, AdocTokenType.COLIST_ITEM
)

_LIST_CONTEXTS: Dict[AdocTokenType, str] = {
    AdocTokenType.ULIST_ITEM: "ulist",
    AdocTokenType.OLIST_ITEM: "olist",
    AdocTokenType.COLIST_ITEM: "colist"
}

_DELIMITER_TYPES: Tuple[AdocTokenType, ...] = (
    AdocTokenType.BLOCK_DELIMITER,
    AdocTokenType.TABLE_DELIMITER,
    AdocTokenType.FENCE,
    AdocTokenType.COMMENT_BLOCK_DELIMITER
)

_CELL_STYLES: Dict[str, str] = {
    "a": "asciidoc",
    "d": "default",
    "e": "emphasis",
    "h": "header",
    "l": "literal",
    "m": "monospaced",
    "s": "strong",
    "v": "verse"
}


class AdocElementBuilder:
    """
    Builder class for constructing a semantic element tree from AsciiDoc text.

    Attributes:
        _lexer (AdocLexer): Line classifier.
        _tokens (List[AdocToken]): Tokens of the document (or table cell) being built.
        _index (int): Index of the next token to consume.
        _document_attributes (Dict[str, str]): Attribute entries seen so far.
    """

    def __init__(self, comment_marker: str = "//") -> None:
        """
        Initialize the builder.

        Args:
            comment_marker: The prefix that marks a single-line comment
        """
        self._lexer = AdocLexer(comment_marker)
        self._tokens: List[AdocToken] = []
        self._index = 0
        self._document_attributes: Dict[str, str] = {}
        self._logger = logging.getLogger("AdocElementBuilder")

        self._author_pattern = re.compile(r'^\s*(.+?)\s*(?:<([^>\s]+)>)?\s*$')
        self._cell_spec_pattern = re.compile(
            r'(?P<dup>\d+\*)?(?P<span>(?P<colspan>\d+)?(?:\.\d+)?\+)?(?P<align>[<^>]?(?:\.[<^>])?)(?P<style>[adehlmsv])?'
        )
        self._cell_spec_end_pattern = re.compile(
            r'\s(\d+\*)?((\d+)?(?:\.\d+)?\+)?([<^>]?(?:\.[<^>])?)([adehlmsv])?$'
        )

    def build(self, text: str) -> AdocDocument:
        """
        Parse AsciiDoc text into a semantic document.

        Args:
            text: The AsciiDoc source

        Returns:
            The root document element
        """
        self._document_attributes = {}
        return self._build_document(text.split('\n'), 1, parse_header=True)

    def _build_document(self, lines: List[str], first_lineno: int, parse_header: bool) -> AdocDocument:
        """
        Build a document (or the inner document of a table cell) from a list of lines.

        Args:
            lines: The source lines
            first_lineno: The line number of the first line in the original source
            parse_header: Whether a document header may be present

        Returns:
            The document element
        """
        saved_tokens, saved_index = self._tokens, self._index
        self._tokens = [self._lexer.classify(line, first_lineno + i) for i, line in enumerate(lines)]
        self._index = 0

        try:
            document = AdocDocument()
            document.lineno = first_lineno
            if parse_header:
                self._parse_header(document)

            blocks = self._parse_blocks(None, None, in_list=False)
            document.blocks = self._wrap_preamble(document, blocks)
            document.attributes.update(self._document_attributes)
            return document

        finally:
            self._tokens, self._index = saved_tokens, saved_index

    def _wrap_preamble(self, document: AdocDocument, blocks: List[AdocElement]) -> List[AdocElement]:
        """
        Wrap the blocks that precede the first section in a preamble, as long as the document has a title.

        Args:
            document: The document being built
            blocks: The top-level blocks

        Returns:
            The top-level blocks, with any leading non-section blocks grouped into a preamble
        """
        if not document.has_header():
            return blocks

        first_section = next((i for i, block in enumerate(blocks) if isinstance(block, AdocSection)), None)
        if first_section is None or first_section == 0:
            return blocks

        preamble = AdocPreamble(blocks[0].lineno, blocks[:first_section])
        return [preamble] + blocks[first_section:]

    def _peek(self) -> AdocToken | None:
        """Return the next token without consuming it."""
        if self._index < len(self._tokens):
            return self._tokens[self._index]

        return None

    def _next_significant_index(self, start: int) -> int:
        """
        Find the first token at or after an index that is neither blank nor a comment.

        Args:
            start: The token index to start at

        Returns:
            The index of the first significant token, or len(tokens) if there is none
        """
        index = start
        while index < len(self._tokens) and self._tokens[index].type in (AdocTokenType.BLANK, AdocTokenType.COMMENT):
            index += 1

        return index

    def _skip_comment_block(self, token: AdocToken) -> None:
        """Skip a '////' comment block, including both delimiters."""
        self._index += 1
        while self._index < len(self._tokens):
            current = self._tokens[self._index]
            self._index += 1
            if current.type == AdocTokenType.COMMENT_BLOCK_DELIMITER and current.marker == token.marker:
                return

        self._logger.warning("Unterminated comment block starting at line %d", token.line)

    def _collect_metadata(self, token: AdocToken, metadata: AdocBlockMetadata) -> bool:
        """
        Add a block metadata line to the pending metadata.

        Args:
            token: The current token
            metadata: The pending metadata

        Returns:
            True if the token was a metadata line and has been consumed
        """
        if token.type == AdocTokenType.BLOCK_ANCHOR:
            metadata.id = token.value
            self._index += 1
            return True

        if token.type == AdocTokenType.BLOCK_ATTRIBUTES:
            attributes = AdocAttributeList.parse(token.value)
            if "id" in attributes:
                metadata.id = attributes.pop("id")

            metadata.attributes.update(attributes)
            self._index += 1
            return True

        if token.type == AdocTokenType.BLOCK_TITLE:
            metadata.title = token.value
            self._index += 1
            return True

        return False

    def _parse_header(self, document: AdocDocument) -> None:
        """
        Parse the document header (title, author line, revision line and attribute entries), if present.

        Args:
            document: The document being built
        """
        start = self._index
        metadata = AdocBlockMetadata()

        while self._index < len(self._tokens):
            token = self._tokens[self._index]
            if token.type in (AdocTokenType.BLANK, AdocTokenType.COMMENT):
                self._index += 1
                continue

            if token.type == AdocTokenType.COMMENT_BLOCK_DELIMITER:
                self._skip_comment_block(token)
                continue

            if token.type == AdocTokenType.ATTRIBUTE_ENTRY:
                self._record_attribute_entry(token)
                self._index += 1
                continue

            if self._collect_metadata(token, metadata):
                continue

            break

        token = self._peek()
        if token is None or token.type != AdocTokenType.SECTION_TITLE or len(token.marker) != 1:
            # No document title, so any metadata we read belongs to the first block
            self._index = start
            return

        self._index += 1
        header = AdocDocumentHeader(token.line, token.value)
        if metadata.id is not None:
            header.id = metadata.id
            document.id = metadata.id

        header.attributes.update(metadata.attributes)
        document.header = header

        # Author line and revision line directly follow the title
        token = self._peek()
        if token is not None and token.type in (AdocTokenType.TEXT, AdocTokenType.DLIST_TERM):
            header.authors = self._parse_authors(token)
            self._index += 1

            token = self._peek()
            if token is not None and token.type in (AdocTokenType.TEXT, AdocTokenType.DLIST_TERM):
                document.attributes["revnumber"] = token.input.strip()
                self._index += 1

        while self._index < len(self._tokens):
            token = self._tokens[self._index]
            if token.type == AdocTokenType.ATTRIBUTE_ENTRY:
                self._record_attribute_entry(token)
                self._index += 1
                continue

            if token.type == AdocTokenType.COMMENT:
                self._index += 1
                continue

            break

    def _parse_authors(self, token: AdocToken) -> List[AdocAuthor]:
        """
        Parse an author line of the form 'Name <email>; Other Name <email>'.

        Args:
            token: The author line token

        Returns:
            The authors named on the line
        """
        authors: List[AdocAuthor] = []
        for entry in token.input.split(';'):
            match = self._author_pattern.match(entry)
            if not match:
                continue

            authors.append(AdocAuthor(token.line, match.group(1), match.group(2)))

        return authors

    def _record_attribute_entry(self, token: AdocToken) -> None:
        """Record a document attribute entry (':name: value'), honouring ':name!:' unsets."""
        name = token.marker
        if name.startswith('!') or name.endswith('!'):
            self._document_attributes.pop(name.strip('!'), None)
            return

        self._document_attributes[name] = token.value

    def _parse_blocks(self, terminator: str | None, section_level: int | None, in_list: bool) -> List[AdocElement]:
        """
        Parse blocks until the end of the enclosing container.

        Args:
            terminator: The closing delimiter of the enclosing delimited block, if any
            section_level: The level of the enclosing section, if any
            in_list: Whether the blocks are attached to a list item

        Returns:
            The parsed blocks
        """
        blocks: List[AdocElement] = []
        metadata = AdocBlockMetadata()

        while self._index < len(self._tokens):
            token = self._tokens[self._index]

            if terminator is not None and token.type in _DELIMITER_TYPES and token.marker == terminator:
                self._index += 1
                return blocks

            if token.type == AdocTokenType.SECTION_TITLE and terminator is None and not in_list:
                level = len(token.marker) - 1
                if section_level is not None and level <= section_level:
                    return blocks

            block = self._parse_block(token, metadata, terminator, section_level, in_list)
            if block is None:
                continue

            metadata.apply(block)
            metadata = AdocBlockMetadata()
            blocks.append(block)

        if terminator is not None:
            self._logger.warning("Unterminated block: expected '%s' before end of input", terminator)

        return blocks

    def _parse_block(
        self,
        token: AdocToken,
        metadata: AdocBlockMetadata,
        terminator: str | None,
        section_level: int | None,
        in_list: bool
    ) -> AdocElement | None:
        """
        Parse the block (or consume the non-block line) that starts at the current token.

        Args:
            token: The current token
            metadata: Pending block metadata; metadata lines are added to it
            terminator: The closing delimiter of the enclosing delimited block, if any
            section_level: The level of the enclosing section, if any
            in_list: Whether the block is attached to a list item

        Returns:
            The parsed block, or None if the token did not start a block
        """
        if token.type in (AdocTokenType.BLANK, AdocTokenType.COMMENT):
            self._index += 1
            return None

        if token.type == AdocTokenType.COMMENT_BLOCK_DELIMITER:
            self._skip_comment_block(token)
            return None

        if token.type == AdocTokenType.ATTRIBUTE_ENTRY:
            self._record_attribute_entry(token)
            self._index += 1
            return None

        if self._collect_metadata(token, metadata):
            return None

        if token.type == AdocTokenType.SECTION_TITLE and terminator is None and not in_list:
            return self._parse_section(token, metadata)

        if token.type == AdocTokenType.TABLE_DELIMITER:
            return self._parse_table(token, metadata)

        if token.type == AdocTokenType.BLOCK_DELIMITER:
            return self._parse_delimited_block(token, metadata)

        if token.type == AdocTokenType.FENCE:
            return self._parse_fenced_block(token)

        if token.type == AdocTokenType.BLOCK_MACRO:
            return self._parse_block_macro(token)

        if token.type in _LIST_ITEM_TYPES:
            return self._parse_list(token, [])

        if token.type == AdocTokenType.DLIST_TERM:
            return self._parse_description_list(token)

        if token.type == AdocTokenType.THEMATIC_BREAK:
            self._index += 1
            return AdocUnhandledElement(token.line, "thematic_break")

        if token.type == AdocTokenType.PAGE_BREAK:
            self._index += 1
            return AdocUnhandledElement(token.line, "page_break")

        if token.type == AdocTokenType.ADMONITION_PARAGRAPH:
            lines = self._read_paragraph_lines(in_list)
            lines[0] = token.value
            return AdocAdmonition(token.line, token.marker, lines)

        return self._parse_paragraph(token, metadata, in_list)

    def _parse_section(self, token: AdocToken, metadata: AdocBlockMetadata) -> AdocElement:
        """
        Parse a section and all the blocks it contains.

        Args:
            token: The section title token
            metadata: Pending block metadata

        Returns:
            The section, or an unhandled element for discrete (floating) titles
        """
        self._index += 1
        level = len(token.marker) - 1

        if metadata.style in ("discrete", "float"):
            return AdocUnhandledElement(token.line, "floating_title")

        # The heading line is the section's title; a '.Title' line above it is dropped
        if metadata.title is not None:
            self._logger.debug("Ignoring block title %r before section at line %d", metadata.title, token.line)
            metadata.title = None

        section = AdocSection(token.line, level, token.value)
        section.blocks = self._parse_blocks(None, level, in_list=False)
        return section

    def _read_paragraph_lines(self, in_list: bool) -> List[str]:
        """
        Read the lines of a paragraph, dropping any comment lines within it.

        Args:
            in_list: Whether the paragraph is attached to a list item, in which case list items and
                list continuations also end the paragraph

        Returns:
            The paragraph lines, with trailing whitespace removed
        """
        lines: List[str] = []
        while self._index < len(self._tokens):
            token = self._tokens[self._index]
            if token.type == AdocTokenType.BLANK:
                break

            if token.type == AdocTokenType.COMMENT:
                self._index += 1
                continue

            if lines and token.type in _DELIMITER_TYPES:
                break

            if lines and in_list and (
                token.type in _LIST_ITEM_TYPES or
                token.type in (AdocTokenType.LIST_CONTINUATION, AdocTokenType.DLIST_TERM)
            ):
                break

            lines.append(token.input.rstrip())
            self._index += 1

        return lines

    def _parse_paragraph(self, token: AdocToken, metadata: AdocBlockMetadata, in_list: bool) -> AdocElement:
        """
        Parse a paragraph, literal paragraph, or a styled paragraph (admonition, source or quote).

        Args:
            token: The first token of the paragraph
            metadata: Pending block metadata
            in_list: Whether the paragraph is attached to a list item

        Returns:
            The paragraph element
        """
        lines = self._read_paragraph_lines(in_list)
        style = metadata.style

        if style in AdocLexer.ADMONITION_STYLES:
            return AdocAdmonition(token.line, style, [line.strip() for line in lines])

        if style in ("source", "listing"):
            listing = AdocListing(token.line, lines, self._source_language(metadata))
            if listing.language:
                listing.attributes["language"] = listing.language

            return listing

        if style == "quote":
            return AdocQuote(token.line, [AdocParagraph(token.line, lines)])

        if style == "verse":
            return AdocUnhandledElement(token.line, "verse")

        if style == "literal" or (token.type == AdocTokenType.INDENTED_TEXT and style != "normal"):
            return AdocParagraph(token.line, self._dedent(lines), "literal")

        if token.type == AdocTokenType.INDENTED_TEXT:
            lines = [line.strip() for line in lines]

        return AdocParagraph(token.line, lines)

    def _dedent(self, lines: List[str]) -> List[str]:
        """Remove the indentation common to all non-blank lines."""
        indents = [len(line) - len(line.lstrip(' \t')) for line in lines if line.strip()]
        if not indents:
            return lines

        indent = min(indents)
        return [line[indent:] for line in lines]

    def _source_language(self, metadata: AdocBlockMetadata) -> str | None:
        """Return the source language declared by '[source,lang]' or 'language=lang', if any."""
        language = metadata.attributes.get("language") or metadata.attributes.get("2")
        if language is None and metadata.style == "source":
            language = self._document_attributes.get("source-language")

        return language or None

    def _read_verbatim(self, token: AdocToken) -> List[str]:
        """
        Read the lines of a verbatim block up to its closing delimiter.

        Args:
            token: The opening delimiter token

        Returns:
            The content lines, exactly as written
        """
        self._index += 1
        lines: List[str] = []
        while self._index < len(self._tokens):
            current = self._tokens[self._index]
            self._index += 1
            if current.type == token.type and current.marker == token.marker:
                return lines

            lines.append(current.input)

        self._logger.warning("Unterminated %s block starting at line %d", token.value or "fenced", token.line)
        return lines

    def _parse_delimited_block(self, token: AdocToken, metadata: AdocBlockMetadata) -> AdocElement:
        """
        Parse a delimited block.

        Args:
            token: The opening delimiter token
            metadata: Pending block metadata

        Returns:
            The block element
        """
        context = token.value
        style = metadata.style

        if context == "listing":
            listing = AdocListing(token.line, self._read_verbatim(token), self._source_language(metadata))
            if listing.language:
                listing.attributes["language"] = listing.language

            return listing

        if context == "literal":
            return AdocParagraph(token.line, self._read_verbatim(token), "literal")

        if context == "pass":
            self._read_verbatim(token)
            return AdocUnhandledElement(token.line, "pass")

        self._index += 1
        blocks = self._parse_blocks(token.marker, None, in_list=False)

        if context == "example" and style in AdocLexer.ADMONITION_STYLES:
            return self._admonition(token, style, blocks)

        if context == "example":
            return AdocExample(token.line, blocks)

        if context == "sidebar":
            return AdocSidebar(token.line, blocks)

        if context == "quote":
            return AdocQuote(token.line, blocks)

        return AdocUnhandledElement(token.line, "open")

    def _admonition(self, token: AdocToken, style: str, blocks: List[AdocElement]) -> AdocAdmonition:
        """Create a block-form admonition holding the given blocks."""
        admonition = AdocAdmonition(token.line, style)
        admonition.blocks = blocks
        return admonition

    def _parse_fenced_block(self, token: AdocToken) -> AdocListing:
        """Parse a ``` fenced code block."""
        listing = AdocListing(token.line, self._read_verbatim(token), token.value or None)
        if listing.language:
            listing.attributes["language"] = listing.language

        return listing

    def _parse_block_macro(self, token: AdocToken) -> AdocElement:
        """
        Parse a block macro line such as 'image::target[...]' or 'toc::[]'.

        Args:
            token: The block macro token

        Returns:
            The macro element
        """
        self._index += 1
        name = token.marker

        if name == "toc":
            return AdocToc(token.line)

        if name != "image":
            return AdocUnhandledElement(token.line, name)

        image = AdocImage(token.line, token.value)
        attributes = AdocAttributeList.parse(token.extra.get("attributes", ""))
        alt = attributes.pop("1", "") or attributes.pop("alt", "")
        attributes.pop("style", None)
        if "2" in attributes:
            attributes["width"] = attributes.pop("2")

        if "3" in attributes:
            attributes["height"] = attributes.pop("3")

        if not alt:
            stem = os.path.splitext(os.path.basename(token.value))[0]
            alt = stem.replace('_', ' ').replace('-', ' ')

        if "id" in attributes:
            image.id = attributes.pop("id")

        image.attributes.update(attributes)
        image.attributes["alt"] = alt
        image.attributes["target"] = token.value
        if "imagesdir" in self._document_attributes:
            image.attributes["imagesdir"] = self._document_attributes["imagesdir"]

        return image

    def _is_list_item(self, token: AdocToken) -> bool:
        """Return True if the token is an ordered, unordered or callout list item."""
        return token.type in _LIST_ITEM_TYPES

    def _parse_list(self, token: AdocToken, ancestors: List[str]) -> AdocList:
        """
        Parse a list whose first item is at the current token.

        Args:
            token: The first item token
            ancestors: Markers of the lists that enclose this one

        Returns:
            The list element
        """
        the_list = AdocList(token.line, _LIST_CONTEXTS[token.type], token.marker)
        markers = ancestors + [token.marker]

        while self._index < len(self._tokens):
            current = self._tokens[self._index]
            if self._is_list_item(current):
                if current.marker != the_list.marker:
                    break

                the_list.items.append(self._parse_list_item(current, markers))
                continue

            if current.type in (AdocTokenType.BLANK, AdocTokenType.COMMENT):
                following = self._next_significant_index(self._index)
                if following < len(self._tokens):
                    candidate = self._tokens[following]
                    if self._is_list_item(candidate) and candidate.marker == the_list.marker:
                        self._index = following
                        continue

            break

        if the_list.is_checklist():
            the_list.attributes["checklist-option"] = ""

        return the_list

    def _read_item_text(self, first: str) -> str:
        """
        Read the principal text of a list item: its first line plus any directly following text lines.

        Args:
            first: The text on the line with the list marker

        Returns:
            The item text, lines joined with newlines
        """
        lines = [first]
        while self._index < len(self._tokens):
            token = self._tokens[self._index]
            if token.type in (AdocTokenType.TEXT, AdocTokenType.INDENTED_TEXT):
                lines.append(token.input.strip())
                self._index += 1
                continue

            if token.type == AdocTokenType.COMMENT:
                self._index += 1
                continue

            break

        return "\n".join(lines)

    def _parse_list_item(self, token: AdocToken, markers: List[str]) -> AdocListItem:
        """
        Parse a list item, including attached blocks and nested lists.

        Args:
            token: The list item token
            markers: Markers of this item's list and of all enclosing lists

        Returns:
            The list item element
        """
        self._index += 1
        item = AdocListItem(token.line, None, token.extra.get("checkbox"))
        item.text = self._read_item_text(token.value)
        self._parse_item_attachments(item, markers)
        return item

    def _parse_item_attachments(self, item: AdocListItem, markers: List[str]) -> None:
        """
        Parse the blocks attached to a list item: continuation blocks, nested lists and indented literals.

        Args:
            item: The list item
            markers: Markers of the enclosing lists; items using them end the attachment
        """
        while self._index < len(self._tokens):
            token = self._tokens[self._index]

            if token.type == AdocTokenType.LIST_CONTINUATION:
                self._index += 1
                block = self._parse_attached_block()
                if block is not None:
                    item.blocks.append(block)

                continue

            if self._is_list_item(token) and token.marker not in markers:
                item.blocks.append(self._parse_list(token, markers))
                continue

            if token.type in (AdocTokenType.BLANK, AdocTokenType.COMMENT):
                following = self._next_significant_index(self._index)
                if following < len(self._tokens):
                    candidate = self._tokens[following]
                    if (self._is_list_item(candidate) and candidate.marker not in markers) or \
                            candidate.type == AdocTokenType.INDENTED_TEXT:
                        self._index = following
                        if candidate.type == AdocTokenType.INDENTED_TEXT:
                            lines = self._read_paragraph_lines(in_list=True)
                            item.blocks.append(AdocParagraph(candidate.line, self._dedent(lines), "literal"))

                        continue

            break

    def _parse_attached_block(self) -> AdocElement | None:
        """
        Parse the single block that follows a list continuation line.

        Returns:
            The attached block, or None if the input ends first
        """
        metadata = AdocBlockMetadata()
        while self._index < len(self._tokens):
            token = self._tokens[self._index]
            block = self._parse_block(token, metadata, None, None, in_list=True)
            if block is None:
                continue

            metadata.apply(block)
            return block

        return None

    def _parse_description_list(self, token: AdocToken) -> AdocDescriptionList:
        """
        Parse a description list whose first term is at the current token.

        Args:
            token: The first term token

        Returns:
            The description list element
        """
        dlist = AdocDescriptionList(token.line, token.marker)

        while self._index < len(self._tokens):
            current = self._tokens[self._index]
            if current.type != AdocTokenType.DLIST_TERM or current.marker != dlist.delimiter:
                break

            dlist.entries.append(self._parse_description_entry(dlist.delimiter))

            following = self._next_significant_index(self._index)
            if following < len(self._tokens):
                candidate = self._tokens[following]
                if candidate.type == AdocTokenType.DLIST_TERM and candidate.marker == dlist.delimiter:
                    self._index = following

        return dlist

    def _parse_description_entry(self, delimiter: str) -> Tuple[List[AdocListItem], AdocListItem | None]:
        """
        Parse one entry of a description list: one or more terms followed by an optional description.

        Args:
            delimiter: The term delimiter of the list ('::', ':::', '::::' or ';;')

        Returns:
            A (terms, description) pair
        """
        terms: List[AdocListItem] = []
        description: AdocListItem | None = None

        while self._index < len(self._tokens):
            token = self._tokens[self._index]
            if token.type != AdocTokenType.DLIST_TERM or token.marker != delimiter:
                break

            self._index += 1
            terms.append(AdocListItem(token.line, token.value))
            inline = token.extra.get("text")
            if inline:
                description = AdocListItem(token.line, self._read_item_text(inline))
                break

        if description is None:
            following = self._next_significant_index(self._index)
            if following < len(self._tokens) and \
                    self._tokens[following].type in (AdocTokenType.TEXT, AdocTokenType.INDENTED_TEXT):
                candidate = self._tokens[following]
                self._index = following + 1
                description = AdocListItem(candidate.line, self._read_item_text(candidate.input.strip()))

        if description is None:
            description = AdocListItem(terms[-1].lineno, None)

        self._parse_description_attachments(description, delimiter)

        if not description.has_text() and not description.has_blocks():
            return terms, None

        return terms, description

    def _parse_description_attachments(self, description: AdocListItem, delimiter: str) -> None:
        """
        Parse blocks attached to a description: continuation blocks, nested lists and nested description lists.

        Args:
            description: The description item
            delimiter: The delimiter of the enclosing description list
        """
        while self._index < len(self._tokens):
            token = self._tokens[self._index]
            if token.type == AdocTokenType.LIST_CONTINUATION:
                self._index += 1
                block = self._parse_attached_block()
                if block is not None:
                    description.blocks.append(block)

                continue

            following = self._next_significant_index(self._index)
            if following >= len(self._tokens):
                break

            candidate = self._tokens[following]
            if self._is_list_item(candidate):
                self._index = following
                description.blocks.append(self._parse_list(candidate, []))
                continue

            if candidate.type == AdocTokenType.DLIST_TERM and candidate.marker != delimiter and \
                    len(candidate.marker) > len(delimiter):
                self._index = following
                description.blocks.append(self._parse_description_list(candidate))
                continue

            break

    def _parse_table(self, token: AdocToken, metadata: AdocBlockMetadata) -> AdocElement:
        """
        Parse a table delimited by '|===' (or '!===' when nested).

        Args:
            token: The opening table delimiter token
            metadata: Pending block metadata

        Returns:
            The table element, or an unhandled element for CSV/DSV tables
        """
        self._index += 1
        content: List[AdocToken] = []
        closed = False
        while self._index < len(self._tokens):
            current = self._tokens[self._index]
            self._index += 1
            if current.type == AdocTokenType.TABLE_DELIMITER and current.marker == token.marker:
                closed = True
                break

            content.append(current)

        if not closed:
            self._logger.warning("Unterminated table starting at line %d", token.line)

        if token.marker not in ('|', '!'):
            return AdocUnhandledElement(token.line, "table")

        table = AdocTable(token.line)
        attributes = dict(metadata.attributes)
        for key in [key for key in attributes if key.isdigit()]:
            del attributes[key]

        cells = self._parse_table_cells(content, token.marker)
        column_count = self._column_count(attributes.get("cols"), content, token.marker)
        rows = self._group_rows(cells, column_count)

        implicit_header = (
            len(content) > 1 and
            content[0].type != AdocTokenType.BLANK and
            content[1].type == AdocTokenType.BLANK
        )
        has_header = "header-option" in attributes or (implicit_header and "noheader-option" not in attributes)
        if has_header and rows:
            table.head_rows = rows[:1]
            table.body_rows = rows[1:]

        else:
            table.body_rows = rows

        table.column_count = column_count
        attributes["colcount"] = str(column_count)
        attributes["rowcount"] = str(len(rows))
        attributes["tablepcwidth"] = attributes.get("width", "100%").rstrip('%')

        table.attributes.update(attributes)

        # Attributes have been applied above, keep the caller from re-applying them
        metadata.attributes = {}
        return table

    def _split_cells_on_line(self, text: str, separator: str) -> Tuple[str, List[Tuple[int, str, str]]]:
        """
        Split one table line into cells.

        Args:
            text: The source line
            separator: The cell separator character

        Returns:
            A tuple of (leading text that continues the previous cell, [(column, cell spec, content), ...]),
            where column is the index just after the cell's separator
        """
        positions = [
            i for i, ch in enumerate(text) if ch == separator and (i == 0 or text[i - 1] != '\\')
        ]
        if not positions:
            return text, []

        # The first separator may be preceded by a cell spec at the start of the line
        prefix = text[:positions[0]]
        specs: List[str] = []
        continuation = ""
        spec_match = self._cell_spec_pattern.fullmatch(prefix.strip())
        if prefix.strip() and spec_match is None:
            continuation = prefix

        specs.append(prefix.strip() if spec_match is not None else "")

        cells: List[Tuple[int, str, str]] = []
        for n, position in enumerate(positions):
            end = positions[n + 1] if n + 1 < len(positions) else len(text)
            segment = text[position + 1:end]
            next_spec = ""
            if n + 1 < len(positions):
                end_match = self._cell_spec_end_pattern.search(segment)
                if end_match and end_match.group(0).strip():
                    next_spec = end_match.group(0).strip()
                    segment = segment[:end_match.start()]

            cells.append((position + 1, specs[-1], segment))
            specs.append(next_spec)

        return continuation, cells

    def _parse_table_cells(self, content: List[AdocToken], separator: str) -> List[AdocTableCell]:
        """
        Parse the cells of a table body.

        Args:
            content: Tokens between the table delimiters
            separator: The cell separator character

        Returns:
            The cells in source order
        """
        # Each pending cell is (line number, spec, list of content lines)
        pending: List[Tuple[int, str, List[str]]] = []

        for token in content:
            if token.type == AdocTokenType.BLANK:
                if pending:
                    pending[-1][2].append("")

                continue

            continuation, cells = self._split_cells_on_line(token.input, separator)
            if continuation and pending:
                pending[-1][2].append(continuation)

            for _column, spec, segment in cells:
                pending.append((token.line, spec, [segment]))

        return [self._make_cell(lineno, spec, lines) for lineno, spec, lines in pending]

    def _make_cell(self, lineno: int, spec: str, lines: List[str]) -> AdocTableCell:
        """
        Create a cell from its raw content lines.

        Args:
            lineno: The line holding the cell's separator
            spec: The cell specifier preceding the separator
            lines: The raw content lines of the cell

        Returns:
            The table cell element
        """
        # Leading blank lines move the start of the text down
        while len(lines) > 1 and not lines[0].strip():
            lines = lines[1:]
            lineno += 1

        while lines and not lines[-1].strip():
            lines = lines[:-1]

        style = None
        colspan = 1
        match = self._cell_spec_pattern.fullmatch(spec) if spec else None
        if match:
            if match.group("style"):
                style = _CELL_STYLES[match.group("style")]

            if match.group("span") and match.group("colspan"):
                colspan = int(match.group("colspan"))
                if colspan == 0:
                    raise AdocParseError(f"Table cell '{spec}|' spans no columns", lineno)

        if style == "asciidoc":
            cell_lines = [lines[0].strip()] + lines[1:] if lines else []
            text = "\n".join(cell_lines)
            cell = AdocTableCell(lineno, text, style, colspan)
            cell.inner_document = self._build_document(cell_lines, lineno, parse_header=False)
            return cell

        text = "\n".join(line.strip() for line in lines).strip()
        return AdocTableCell(lineno, text, style, colspan)

    def _column_count(self, cols: str | None, content: List[AdocToken], separator: str) -> int:
        """
        Work out the number of columns of a table.

        Args:
            cols: The value of the 'cols' attribute, if given
            content: Tokens between the table delimiters
            separator: The cell separator character

        Returns:
            The column count (at least 1)
        """
        if cols:
            count = 0
            for entry in AdocAttributeList.split_entries(cols.replace(';', ',')):
                multiplier = re.match(r'^(\d+)\*', entry)
                count += int(multiplier.group(1)) if multiplier else 1

            return max(1, count)

        for token in content:
            if token.type == AdocTokenType.BLANK:
                continue

            _continuation, cells = self._split_cells_on_line(token.input, separator)
            if not cells:
                continue

            count = 0
            for _column, spec, _segment in cells:
                match = self._cell_spec_pattern.fullmatch(spec) if spec else None
                if match and match.group("colspan") and match.group("span"):
                    count += int(match.group("colspan"))

                else:
                    count += 1

            return max(1, count)

        return 1

    def _group_rows(self, cells: List[AdocTableCell], column_count: int) -> List[List[AdocTableCell]]:
        """Group cells into rows of column_count columns, honouring column spans."""
        rows: List[List[AdocTableCell]] = []
        row: List[AdocTableCell] = []
        width = 0
        for cell in cells:
            row.append(cell)
            width += cell.colspan
            if width >= column_count:
                rows.append(row)
                row = []
                width = 0

        if row:
            rows.append(row)

        return rows
