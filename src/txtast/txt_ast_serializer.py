"""
Visitor that serializes a text AST into plain dictionaries.
"""

import json
from typing import Any, Dict

from txtast.txt_ast_node import (
    TxtASTAdmonitionNode, TxtASTAttributeNode, TxtASTCodeBlockNode, TxtASTHeaderNode, TxtASTNode, TxtASTStrNode,
    TxtASTVisitor
)


class TxtASTSerializer(TxtASTVisitor):
    """Serializes nodes to the generic text AST shape: type, children, raw, loc and range."""

    def _common(self, node: TxtASTNode, result: Dict[str, Any]) -> Dict[str, Any]:
        result["raw"] = node.raw
        result["loc"] = node.loc.to_dict()
        result["range"] = [node.range[0], node.range[1]]
        return result

    def _with_children(self, node: TxtASTNode, result: Dict[str, Any]) -> Dict[str, Any]:
        result["children"] = super().generic_visit(node)
        return self._common(node, result)

    def generic_visit(self, node: TxtASTNode) -> Dict[str, Any]:
        """Serialize a node that has no kind-specific fields."""
        return self._with_children(node, {"type": node.type})

    def visit_TxtASTStrNode(self, node: TxtASTStrNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a Str leaf; leaves have no children."""
        return self._common(node, {"type": node.type, "value": node.value})

    def visit_TxtASTHeaderNode(self, node: TxtASTHeaderNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a header with its depth."""
        return self._with_children(node, {"type": node.type, "depth": node.depth})

    def visit_TxtASTCodeBlockNode(self, node: TxtASTCodeBlockNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize a code block with its language (when known) and code."""
        result: Dict[str, Any] = {"type": node.type}
        if node.lang is not None:
            result["lang"] = node.lang

        result = self._with_children(node, result)
        result["value"] = node.value
        return result

    def visit_TxtASTAttributeNode(self, node: TxtASTAttributeNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize an attribute with its name."""
        return self._with_children(node, {"type": node.type, "name": node.name})

    def visit_TxtASTAdmonitionNode(self, node: TxtASTAdmonitionNode) -> Dict[str, Any]:  # pylint: disable=invalid-name
        """Serialize an admonition with its style."""
        return self._with_children(node, {"type": node.type, "style": node.style})


def serialize(node: TxtASTNode) -> Dict[str, Any]:
    """Serialize a tree to nested dictionaries."""
    return TxtASTSerializer().visit(node)


def to_json(node: TxtASTNode, indent: int | None = 2) -> str:
    """Serialize a tree to a JSON string."""
    return json.dumps(serialize(node), indent=indent)
