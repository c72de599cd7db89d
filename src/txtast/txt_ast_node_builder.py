"""Assembly of located text AST nodes."""

from typing import Any, List, Type, TypeVar

from txtast.source_index import SourceIndex
from txtast.txt_ast_node import (
    TxtASTDocumentNode, TxtASTLocation, TxtASTNode, TxtASTPosition, TxtASTStrNode
)


N = TypeVar('N', bound=TxtASTNode)


class TxtASTNodeBuilder:
    """
    Builds nodes whose ranges are derived from their locations.

    Leaves get their span from a located literal; containers take the union of their children's spans.
    """

    def __init__(self, index: SourceIndex) -> None:
        self._index = index

    def text(self, value: str, loc: TxtASTLocation) -> TxtASTStrNode:
        """
        Build a Str leaf.

        Args:
            value: The literal text
            loc: Where the text was found

        Returns:
            The Str node
        """
        return TxtASTStrNode(value, loc, self._index.location_to_range(loc))

    def leaf_wrapper(self, node_class: Type[N], value: str, loc: TxtASTLocation, **fields: Any) -> N:
        """
        Build a node that wraps a single Str holding its literal text (ID, BlockTitle, Attribute, ...).

        Args:
            node_class: The class of the wrapping node
            value: The literal text
            loc: Where the text was found
            fields: Extra node-specific constructor arguments

        Returns:
            The wrapping node
        """
        text_range = self._index.location_to_range(loc)
        return node_class(value, loc, text_range, [self.text(value, loc)], **fields)

    def located(
        self,
        node_class: Type[N],
        raw: str,
        loc: TxtASTLocation,
        children: List[TxtASTNode],
        **fields: Any
    ) -> N:
        """
        Build a node with an independently located span.

        Args:
            node_class: The class of the node
            raw: The node's literal text
            loc: The node's location
            children: The node's children
            fields: Extra node-specific constructor arguments

        Returns:
            The node
        """
        return node_class(raw, loc, self._index.location_to_range(loc), children, **fields)

    def union_location(self, locations: List[TxtASTLocation]) -> TxtASTLocation:
        """
        Compute the span covering a non-empty list of locations.

        Args:
            locations: The locations to cover

        Returns:
            The location from the earliest start to the latest end
        """
        start = min((loc.start for loc in locations), key=lambda p: (p.line, p.column))
        end = max((loc.end for loc in locations), key=lambda p: (p.line, p.column))
        return TxtASTLocation(start, end)

    def container(self, node_class: Type[N], children: List[TxtASTNode], raw: str = "", **fields: Any) -> N:
        """
        Build a node whose span is the union of its children's spans.

        Args:
            node_class: The class of the node
            children: The node's children; must not be empty
            raw: The node's literal text, "" when it has none
            fields: Extra node-specific constructor arguments

        Returns:
            The container node
        """
        loc = self.union_location([child.loc for child in children])
        return node_class(raw, loc, self._index.location_to_range(loc), children, **fields)

    def document(self, children: List[TxtASTNode]) -> TxtASTDocumentNode:
        """
        Build a document node covering its children; its raw text is the covered source.

        Args:
            children: The top-level nodes; must not be empty

        Returns:
            The document node
        """
        loc = self.union_location([child.loc for child in children])
        text_range = self._index.location_to_range(loc)
        return TxtASTDocumentNode(self._index.text[text_range[0]:text_range[1]], loc, text_range, children)

    def empty_document(self) -> TxtASTDocumentNode:
        """Build the canonical empty document."""
        origin = TxtASTPosition(1, 0)
        return TxtASTDocumentNode("", TxtASTLocation(origin, origin), (0, 0), [])
