"""
Semantic elements produced by the AsciiDoc element builder.

Each element records the approximate 1-based line on which it starts together with the literal content
the location engine needs to find it again in the source.  The set of element classes is closed: every
kind of block the builder recognizes has its own class, and anything else is represented by an
AdocUnhandledElement that carries only its context name.
"""

from typing import Dict, List, Tuple


class AdocElement:
    """Base class for all semantic AsciiDoc elements."""

    context = ""

    def __init__(self, lineno: int) -> None:
        """
        Initialize an element.

        Args:
            lineno: The 1-based line on which the element starts
        """
        self.lineno = lineno
        self.title: str | None = None
        self.id: str | None = None
        self.attributes: Dict[str, str] = {}

    def has_title(self) -> bool:
        """Return True if the element has a block title."""
        return bool(self.title)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(line {self.lineno})"


class AdocBlockContainer(AdocElement):
    """Base class for elements that contain other blocks."""

    def __init__(self, lineno: int, blocks: List[AdocElement] | None = None) -> None:
        super().__init__(lineno)
        self.blocks: List[AdocElement] = blocks if blocks is not None else []

    def has_blocks(self) -> bool:
        """Return True if the container holds any blocks."""
        return len(self.blocks) > 0


class AdocAuthor(AdocElement):
    """An author entry from the document header."""

    context = "author"

    def __init__(self, lineno: int, name: str, email: str | None = None) -> None:
        """
        Initialize an author.

        Args:
            lineno: The line of the author line
            name: The author's full name as written
            email: The author's email address, if given
        """
        super().__init__(lineno)
        self.name = name
        self.email = email


class AdocDocumentHeader(AdocElement):
    """The document title line and the author line that may follow it."""

    context = "header"

    def __init__(self, lineno: int, title: str) -> None:
        super().__init__(lineno)
        self.title = title
        self.level = 0
        self.authors: List[AdocAuthor] = []


class AdocDocument(AdocBlockContainer):
    """The root element of a parsed document."""

    context = "document"

    def __init__(self) -> None:
        super().__init__(1)
        self.header: AdocDocumentHeader | None = None

    def has_header(self) -> bool:
        """Return True if the document has a title header."""
        return self.header is not None


class AdocSection(AdocBlockContainer):
    """A section, introduced by a section title line."""

    context = "section"

    def __init__(self, lineno: int, level: int, title: str) -> None:
        """
        Initialize a section.

        Args:
            lineno: The line of the section title
            level: The section level (number of '=' characters minus one)
            title: The section title text
        """
        super().__init__(lineno)
        self.level = level
        self.title = title


class AdocPreamble(AdocBlockContainer):
    """The blocks between the document header and the first section."""

    context = "preamble"


class AdocParagraph(AdocElement):
    """A paragraph, or a literal paragraph/block when the context is 'literal'."""

    context = "paragraph"

    def __init__(self, lineno: int, lines: List[str], context: str = "paragraph") -> None:
        """
        Initialize a paragraph.

        Args:
            lineno: The line of the first content line
            lines: The content lines, with comment lines removed
            context: Either 'paragraph' or 'literal'
        """
        super().__init__(lineno)
        self.lines = lines
        self.context = context

    @property
    def source(self) -> str:
        """The paragraph content as a single string."""
        return "\n".join(self.lines)


class AdocListItem(AdocBlockContainer):
    """An item of an ordered, unordered, callout or description list, or a description list term."""

    context = "list_item"

    def __init__(self, lineno: int, text: str | None, checkbox: str | None = None) -> None:
        """
        Initialize a list item.

        Args:
            lineno: The line on which the item text starts
            text: The principal text of the item, or None if it has none
            checkbox: 'checked' or 'unchecked' for checklist items
        """
        super().__init__(lineno)
        self.text = text
        self.checkbox = checkbox

    def has_text(self) -> bool:
        """Return True if the item has principal text."""
        return self.text is not None and self.text != ""


class AdocList(AdocElement):
    """An unordered ('ulist'), ordered ('olist') or callout ('colist') list."""

    def __init__(self, lineno: int, context: str, marker: str) -> None:
        super().__init__(lineno)
        self.context = context
        self.marker = marker
        self.items: List[AdocListItem] = []

    def is_checklist(self) -> bool:
        """Return True if any item of the list carries a checkbox."""
        return any(item.checkbox is not None for item in self.items)


class AdocDescriptionList(AdocElement):
    """A description (labeled) list made of (terms, description) pairs."""

    context = "dlist"

    def __init__(self, lineno: int, delimiter: str) -> None:
        super().__init__(lineno)
        self.delimiter = delimiter
        self.entries: List[Tuple[List[AdocListItem], AdocListItem | None]] = []


class AdocQuote(AdocBlockContainer):
    """A quote block delimited by '____'."""

    context = "quote"


class AdocListing(AdocElement):
    """A listing or source block."""

    context = "listing"

    def __init__(self, lineno: int, lines: List[str], language: str | None = None) -> None:
        """
        Initialize a listing.

        Args:
            lineno: The line of the opening delimiter
            lines: The verbatim code lines
            language: The source language, if one was declared
        """
        super().__init__(lineno)
        self.lines = lines
        self.language = language

    @property
    def source(self) -> str:
        """The code as a single string."""
        return "\n".join(self.lines)


class AdocSidebar(AdocBlockContainer):
    """A sidebar block delimited by '****'."""

    context = "sidebar"


class AdocExample(AdocBlockContainer):
    """An example block delimited by '===='."""

    context = "example"


class AdocAdmonition(AdocBlockContainer):
    """An admonition, either in paragraph form ('NOTE: ...') or as a styled example block."""

    context = "admonition"

    def __init__(self, lineno: int, style: str, lines: List[str] | None = None) -> None:
        """
        Initialize an admonition.

        Args:
            lineno: The line on which the admonition content starts
            style: The admonition style (NOTE, TIP, IMPORTANT, WARNING or CAUTION)
            lines: The content lines of a paragraph-form admonition
        """
        super().__init__(lineno)
        self.style = style
        self.lines: List[str] = lines if lines is not None else []


class AdocTableCell(AdocElement):
    """A single table cell."""

    context = "table_cell"

    def __init__(self, lineno: int, text: str, style: str | None = None, colspan: int = 1) -> None:
        """
        Initialize a table cell.

        Args:
            lineno: The line on which the cell text starts
            text: The stripped cell text (may span several lines)
            style: The cell style, 'asciidoc' for cells holding nested blocks
            colspan: Number of columns the cell spans
        """
        super().__init__(lineno)
        self.text = text
        self.style = style
        self.colspan = colspan
        self.inner_document: AdocDocument | None = None


class AdocTable(AdocElement):
    """A table delimited by '|==='."""

    context = "table"

    def __init__(self, lineno: int) -> None:
        super().__init__(lineno)
        self.column_count = 0
        self.head_rows: List[List[AdocTableCell]] = []
        self.body_rows: List[List[AdocTableCell]] = []


class AdocImage(AdocElement):
    """A block image macro ('image::target[...]')."""

    context = "image"

    def __init__(self, lineno: int, target: str) -> None:
        super().__init__(lineno)
        self.target = target


class AdocToc(AdocElement):
    """A table of contents macro ('toc::[]')."""

    context = "toc"


class AdocUnhandledElement(AdocElement):
    """An element kind the location engine has no output node for (open, pass, verse, breaks, ...)."""

    def __init__(self, lineno: int, context: str) -> None:
        super().__init__(lineno)
        self.context = context
