"""
Located text AST nodes.

Every node carries the exact source span it was recovered from: a line/column location and the
equivalent absolute character range.  Nodes are built once, bottom-up, and are not modified afterwards.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Type


@dataclass(frozen=True)
class TxtASTPosition:
    """A position in the source: 1-based line, 0-based column within that line."""
    line: int
    column: int

    def to_dict(self) -> Dict[str, int]:
        """Return the position in its serialized form."""
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True)
class TxtASTLocation:
    """A source span; the end position is exclusive."""
    start: TxtASTPosition
    end: TxtASTPosition

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        """Return the location in its serialized form."""
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


class TxtASTNode:
    """Base class for all located text AST nodes."""

    NODE_TYPE = ""

    def __init__(
        self,
        raw: str,
        loc: TxtASTLocation,
        text_range: Tuple[int, int],
        children: List['TxtASTNode'] | None = None
    ) -> None:
        """
        Initialize a node.

        Args:
            raw: The literal source text of the node, or "" when it has no single literal form
            loc: The line/column span of the node
            text_range: The absolute [start, end) character offsets of the node
            children: The child nodes, in document order
        """
        self.raw = raw
        self.loc = loc
        self.range = text_range
        self.children: List[TxtASTNode] = children if children is not None else []

    @property
    def type(self) -> str:
        """The node's type name, as used in serialized output."""
        return self.NODE_TYPE

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.range[0]}-{self.range[1]})"


class TxtASTVisitor:
    """
    Base visitor class for text AST traversal.

    Dispatches to `visit_<ClassName>` methods, falling back to generic_visit.
    """

    def visit(self, node: TxtASTNode) -> Any:
        """
        Visit a node and dispatch to the appropriate visit method.

        Args:
            node: The node to visit

        Returns:
            The result of visiting the node
        """
        method_name = f'visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: TxtASTNode) -> List[Any]:
        """
        Default visit method for nodes without specific handlers.

        Args:
            node: The node to visit

        Returns:
            A list of results from visiting each child
        """
        results = []
        for child in node.children:
            results.append(self.visit(child))

        return results


class TxtASTDocumentNode(TxtASTNode):
    """Root node of a converted document."""

    NODE_TYPE = "Document"


class TxtASTHeaderNode(TxtASTNode):
    """A document or section title."""

    NODE_TYPE = "Header"

    def __init__(
        self,
        raw: str,
        loc: TxtASTLocation,
        text_range: Tuple[int, int],
        children: List[TxtASTNode] | None = None,
        depth: int = 1
    ) -> None:
        super().__init__(raw, loc, text_range, children)
        self.depth = depth


class TxtASTParagraphNode(TxtASTNode):
    """A paragraph or literal paragraph."""

    NODE_TYPE = "Paragraph"


class TxtASTListNode(TxtASTNode):
    """An ordered, unordered, callout or description list."""

    NODE_TYPE = "List"


class TxtASTListItemNode(TxtASTNode):
    """A list item, or a term or description of a description list."""

    NODE_TYPE = "ListItem"


class TxtASTBlockQuoteNode(TxtASTNode):
    """A quote block."""

    NODE_TYPE = "BlockQuote"


class TxtASTCodeBlockNode(TxtASTNode):
    """A listing or source block."""

    NODE_TYPE = "CodeBlock"

    def __init__(
        self,
        raw: str,
        loc: TxtASTLocation,
        text_range: Tuple[int, int],
        children: List[TxtASTNode] | None = None,
        lang: str | None = None
    ) -> None:
        super().__init__(raw, loc, text_range, children)
        self.lang = lang

    @property
    def value(self) -> str:
        """The code held by the block."""
        return self.raw


class TxtASTTableNode(TxtASTNode):
    """A table."""

    NODE_TYPE = "Table"


class TxtASTTableRowNode(TxtASTNode):
    """A row of a table."""

    NODE_TYPE = "TableRow"


class TxtASTTableCellNode(TxtASTNode):
    """A cell of a table row."""

    NODE_TYPE = "TableCell"


class TxtASTAdmonitionNode(TxtASTNode):
    """An admonition such as NOTE or WARNING."""

    NODE_TYPE = "Admonition"

    def __init__(
        self,
        raw: str,
        loc: TxtASTLocation,
        text_range: Tuple[int, int],
        children: List[TxtASTNode] | None = None,
        style: str = ""
    ) -> None:
        super().__init__(raw, loc, text_range, children)
        self.style = style


class TxtASTSidebarNode(TxtASTNode):
    """A sidebar block."""

    NODE_TYPE = "Sidebar"


class TxtASTImageNode(TxtASTNode):
    """A block image."""

    NODE_TYPE = "Image"


class TxtASTAttributesNode(TxtASTNode):
    """The serialized attribute list of a table."""

    NODE_TYPE = "Attributes"


class TxtASTAttributeNode(TxtASTNode):
    """A single named attribute value located in the source."""

    NODE_TYPE = "Attribute"

    def __init__(
        self,
        raw: str,
        loc: TxtASTLocation,
        text_range: Tuple[int, int],
        children: List[TxtASTNode] | None = None,
        name: str = ""
    ) -> None:
        super().__init__(raw, loc, text_range, children)
        self.name = name


class TxtASTIDNode(TxtASTNode):
    """A block or section id."""

    NODE_TYPE = "ID"


class TxtASTBlockTitleNode(TxtASTNode):
    """A '.Title' line belonging to a block."""

    NODE_TYPE = "BlockTitle"


class TxtASTTOCNode(TxtASTNode):
    """A table of contents macro."""

    NODE_TYPE = "TOC"


class TxtASTStrNode(TxtASTNode):
    """A literal text leaf."""

    NODE_TYPE = "Str"

    @property
    def value(self) -> str:
        """The literal text; always equal to raw."""
        return self.raw


class TxtASTAuthorNode(TxtASTNode):
    """An author from the document header."""

    NODE_TYPE = "Author"


class TxtASTAuthorNameNode(TxtASTNode):
    """The name of an author."""

    NODE_TYPE = "AuthorName"


class TxtASTAuthorEmailNode(TxtASTNode):
    """The email address of an author."""

    NODE_TYPE = "AuthorEmail"


NODE_CLASSES: Dict[str, Type[TxtASTNode]] = {
    cls.NODE_TYPE: cls for cls in (
        TxtASTDocumentNode, TxtASTHeaderNode, TxtASTParagraphNode, TxtASTListNode, TxtASTListItemNode,
        TxtASTBlockQuoteNode, TxtASTCodeBlockNode, TxtASTTableNode, TxtASTTableRowNode, TxtASTTableCellNode,
        TxtASTAdmonitionNode, TxtASTSidebarNode, TxtASTImageNode, TxtASTAttributesNode, TxtASTAttributeNode,
        TxtASTIDNode, TxtASTBlockTitleNode, TxtASTTOCNode, TxtASTStrNode, TxtASTAuthorNode,
        TxtASTAuthorNameNode, TxtASTAuthorEmailNode
    )
}
