"""
Structural validation of converted text AST trees.
"""

import logging

from txtast.source_index import SourceIndex
from txtast.txt_ast_errors import TxtASTValidationError
from txtast.txt_ast_node import NODE_CLASSES, TxtASTNode, TxtASTStrNode


class TxtASTValidator:
    """
    Checks that a tree satisfies the text AST contract for a given source text.

    Every node must have a known type, a string raw value, a well ordered location and a range that lies
    within the text, agrees with the location and contains the ranges of all its children.
    """

    def __init__(self, text: str) -> None:
        self._text_length = len(text)
        self._index = SourceIndex(text)
        self._logger = logging.getLogger("TxtASTValidator")

    def validate(self, node: TxtASTNode) -> None:
        """
        Validate a tree.

        Args:
            node: The root of the tree

        Raises:
            TxtASTValidationError: On the first rule the tree breaks
        """
        self._validate_node(node)
        self._logger.debug("Validated %s tree", node.type)

    def _validate_node(self, node: TxtASTNode) -> None:
        node_type = node.type
        if node_type not in NODE_CLASSES:
            raise TxtASTValidationError(f"unknown node type {node_type!r}", node_type)

        if not isinstance(node.raw, str):
            raise TxtASTValidationError("raw must be a string", node_type, node.range)

        start, end = node.range
        if not isinstance(start, int) or not isinstance(end, int):
            raise TxtASTValidationError("range must hold integer offsets", node_type, node.range)

        if not 0 <= start <= end <= self._text_length:
            raise TxtASTValidationError(
                f"range is outside the text (length {self._text_length})", node_type, node.range
            )

        loc_start, loc_end = node.loc.start, node.loc.end
        if (loc_start.line, loc_start.column) > (loc_end.line, loc_end.column):
            raise TxtASTValidationError("location ends before it starts", node_type, node.range)

        if loc_start.line < 1 or loc_end.line > self._index.line_count:
            raise TxtASTValidationError("location lines are outside the text", node_type, node.range)

        if self._index.location_to_range(node.loc) != (start, end):
            raise TxtASTValidationError("range does not match location", node_type, node.range)

        if isinstance(node, TxtASTStrNode) and node.children:
            raise TxtASTValidationError("Str nodes cannot have children", node_type, node.range)

        for child in node.children:
            if child.range[0] < start or child.range[1] > end:
                raise TxtASTValidationError(
                    f"child {child.type} range {child.range} is outside its parent", node_type, node.range
                )

            self._validate_node(child)
