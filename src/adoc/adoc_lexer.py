"""
Line classifier for AsciiDoc source text.

AsciiDoc is a line-oriented language: the role of almost every line can be
decided from the line alone.  The lexer is therefore stateless; the element
builder decides how a classified line is used based on its own context (for
example a classified list item inside a listing block is still plain code).
"""

import re
from typing import Dict, Final, Tuple

from adoc.adoc_token import AdocToken, AdocTokenType


class AdocLexer:
    """
    Classifies individual AsciiDoc source lines into tokens.
    """

    ADMONITION_STYLES: Final[Tuple[str, ...]] = ("NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION")

    # Maps a delimiter's leading character to the block context it opens
    DELIMITED_CONTEXTS: Final[Dict[str, str]] = {
        "-": "listing",
        ".": "literal",
        "=": "example",
        "*": "sidebar",
        "_": "quote",
        "+": "pass",
        "/": "comment"
    }

    def __init__(self, comment_marker: str = "//") -> None:
        """
        Initialize the lexer.

        Args:
            comment_marker: The prefix that marks a single-line comment
        """
        self._comment_marker = comment_marker
        marker = re.escape(comment_marker)

        self._comment_block_pattern = re.compile(r'^/{4,}\s*$')
        self._comment_pattern = re.compile(rf'^{marker}')
        self._attribute_entry_pattern = re.compile(r'^:(!?\w[\w-]*!?):(?:\s+(.*?))?\s*$')
        self._block_anchor_pattern = re.compile(r'^\[\[([\w:][\w:.-]*)(?:,\s*(.+?))?\]\]\s*$')
        self._block_attributes_pattern = re.compile(r'^\[(.*)\]\s*$')
        self._table_delimiter_pattern = re.compile(r'^([|!,:])={3,}\s*$')
        self._block_delimiter_pattern = re.compile(r'^(-{4,}|\.{4,}|={4,}|\*{4,}|_{4,}|\+{4,}|--)\s*$')
        self._fence_pattern = re.compile(r'^```([\w+#.-]*)\s*$')
        self._list_continuation_pattern = re.compile(r'^\+\s*$')
        self._thematic_break_pattern = re.compile(r"^'{3}\s*$")
        self._page_break_pattern = re.compile(r'^<{3}\s*$')
        self._section_title_pattern = re.compile(r'^(={1,6})\s+(\S.*?)(?:\s+=+)?\s*$')
        self._block_title_pattern = re.compile(r'^\.([^\s.].*?)\s*$')
        self._block_macro_pattern = re.compile(r'^(\w[\w-]*)::(\S*?)\[(.*)\]\s*$')
        self._admonition_pattern = re.compile(rf'^({"|".join(self.ADMONITION_STYLES)}):\s+(.*?)\s*$')
        self._colist_pattern = re.compile(r'^<(\d+|\.)>\s+(.*?)\s*$')
        self._ulist_pattern = re.compile(r'^\s*(-|\*{1,5})\s+(.*?)\s*$')
        self._olist_pattern = re.compile(r'^\s*(\.{1,5}|\d+\.)\s+(.*?)\s*$')
        self._checkbox_pattern = re.compile(r'^\[([ xX*])\]\s+(.*)$')
        self._dlist_pattern = re.compile(r'^\s*(\S.*?)(:{2,4}|;;)(?:\s+(.*?))?\s*$')

    @property
    def comment_marker(self) -> str:
        """The single-line comment prefix this lexer recognizes."""
        return self._comment_marker

    def classify(self, line: str, line_number: int) -> AdocToken:
        """
        Classify a single line of source.

        Args:
            line: The source line, without a line terminator
            line_number: The 1-based number of the line

        Returns:
            The token describing the line
        """
        # Trailing carriage returns are not content
        text = line.rstrip('\r')

        if not text.strip():
            return AdocToken(AdocTokenType.BLANK, "", text, line_number)

        if self._comment_block_pattern.match(text):
            return AdocToken(AdocTokenType.COMMENT_BLOCK_DELIMITER, text.strip(), text, line_number, marker=text.strip())

        if self._comment_pattern.match(text):
            return AdocToken(AdocTokenType.COMMENT, text[len(self._comment_marker):], text, line_number)

        match = self._attribute_entry_pattern.match(text)
        if match:
            return AdocToken(
                AdocTokenType.ATTRIBUTE_ENTRY, match.group(2) or "", text, line_number, marker=match.group(1)
            )

        match = self._block_anchor_pattern.match(text)
        if match:
            extra = {"reftext": match.group(2)} if match.group(2) else {}
            return AdocToken(AdocTokenType.BLOCK_ANCHOR, match.group(1), text, line_number, extra=extra)

        match = self._table_delimiter_pattern.match(text)
        if match:
            return AdocToken(AdocTokenType.TABLE_DELIMITER, text.strip(), text, line_number, marker=match.group(1))

        match = self._block_delimiter_pattern.match(text)
        if match:
            delimiter = match.group(1)
            context = "open" if delimiter == "--" else self.DELIMITED_CONTEXTS[delimiter[0]]
            return AdocToken(AdocTokenType.BLOCK_DELIMITER, context, text, line_number, marker=delimiter)

        match = self._fence_pattern.match(text)
        if match:
            return AdocToken(AdocTokenType.FENCE, match.group(1), text, line_number, marker="```")

        if self._list_continuation_pattern.match(text):
            return AdocToken(AdocTokenType.LIST_CONTINUATION, "+", text, line_number)

        if self._thematic_break_pattern.match(text):
            return AdocToken(AdocTokenType.THEMATIC_BREAK, "", text, line_number)

        if self._page_break_pattern.match(text):
            return AdocToken(AdocTokenType.PAGE_BREAK, "", text, line_number)

        match = self._block_attributes_pattern.match(text)
        if match:
            return AdocToken(AdocTokenType.BLOCK_ATTRIBUTES, match.group(1), text, line_number)

        match = self._section_title_pattern.match(text)
        if match:
            return AdocToken(AdocTokenType.SECTION_TITLE, match.group(2), text, line_number, marker=match.group(1))

        match = self._block_title_pattern.match(text)
        if match:
            return AdocToken(AdocTokenType.BLOCK_TITLE, match.group(1), text, line_number)

        match = self._block_macro_pattern.match(text)
        if match:
            return AdocToken(
                AdocTokenType.BLOCK_MACRO,
                match.group(2),
                text,
                line_number,
                marker=match.group(1),
                extra={"attributes": match.group(3)}
            )

        match = self._admonition_pattern.match(text)
        if match:
            return AdocToken(AdocTokenType.ADMONITION_PARAGRAPH, match.group(2), text, line_number, marker=match.group(1))

        match = self._colist_pattern.match(text)
        if match:
            return AdocToken(AdocTokenType.COLIST_ITEM, match.group(2), text, line_number, marker="<.>")

        match = self._ulist_pattern.match(text)
        if match:
            return self._list_item_token(AdocTokenType.ULIST_ITEM, match.group(1), match.group(2), text, line_number)

        match = self._olist_pattern.match(text)
        if match:
            marker = match.group(1)
            if marker[0].isdigit():
                marker = "1."

            return self._list_item_token(AdocTokenType.OLIST_ITEM, marker, match.group(2), text, line_number)

        match = self._dlist_pattern.match(text)
        if match:
            return AdocToken(
                AdocTokenType.DLIST_TERM,
                match.group(1),
                text,
                line_number,
                marker=match.group(2),
                extra={"text": match.group(3)} if match.group(3) else {}
            )

        if text[0] in (' ', '\t'):
            indent = len(text) - len(text.lstrip(' \t'))
            return AdocToken(
                AdocTokenType.INDENTED_TEXT, text.strip(), text, line_number, extra={"indent": str(indent)}
            )

        return AdocToken(AdocTokenType.TEXT, text.rstrip(), text, line_number)

    def _list_item_token(
        self,
        token_type: AdocTokenType,
        marker: str,
        item_text: str,
        line: str,
        line_number: int
    ) -> AdocToken:
        """
        Build a list item token, separating any checklist checkbox from the item text.

        Args:
            token_type: ULIST_ITEM or OLIST_ITEM
            marker: The normalized list marker
            item_text: The text after the marker
            line: The source line
            line_number: The 1-based line number

        Returns:
            The list item token
        """
        extra: Dict[str, str] = {}
        match = self._checkbox_pattern.match(item_text)
        if token_type == AdocTokenType.ULIST_ITEM and match:
            extra["checkbox"] = "checked" if match.group(1) != " " else "unchecked"
            item_text = match.group(2)

        return AdocToken(token_type, item_text, line, line_number, marker=marker, extra=extra)
