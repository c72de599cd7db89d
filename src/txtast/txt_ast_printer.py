"""
Visitor class to print text AST structures for debugging
"""
from typing import Any, List

from txtast.txt_ast_node import TxtASTNode, TxtASTStrNode, TxtASTVisitor


class TxtASTPrinter(TxtASTVisitor):
    """Visitor that prints the AST structure for debugging."""
    def __init__(self) -> None:
        """Initialize the AST printer with zero indentation."""
        super().__init__()
        self.indent_level = 0

    def _indent(self) -> str:
        """
        Get the current indentation string.

        Returns:
            A string of spaces for the current indentation level
        """
        return "  " * self.indent_level

    def _span(self, node: TxtASTNode) -> str:
        start, end = node.loc.start, node.loc.end
        return f"{start.line}:{start.column}-{end.line}:{end.column} [{node.range[0]}, {node.range[1]}]"

    def generic_visit(self, node: TxtASTNode) -> List[Any]:
        """
        Default visit method that prints the node type and span.

        Args:
            node: The node to visit

        Returns:
            The results of visiting the children
        """
        print(f"{self._indent()}{node.type} {self._span(node)}")
        self.indent_level += 1
        results = super().generic_visit(node)
        self.indent_level -= 1
        return results

    def visit_TxtASTStrNode(self, node: TxtASTStrNode) -> str:  # pylint: disable=invalid-name
        """
        Visit a Str node and print its value.

        Args:
            node: The Str node to visit

        Returns:
            The text value
        """
        print(f"{self._indent()}Str {self._span(node)}: {node.value!r}")
        return node.value
