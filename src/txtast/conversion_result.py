"""Results of converting a single semantic element."""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from txtast.txt_ast_node import TxtASTNode


@dataclass(frozen=True)
class Found:
    """An element that produced one or more located nodes."""
    nodes: Tuple[TxtASTNode, ...]

    @classmethod
    def of(cls, *nodes: TxtASTNode) -> 'Found':
        """Create a result holding the given nodes."""
        return cls(tuple(nodes))


@dataclass(frozen=True)
class Omitted:
    """An element that produced no nodes, and why."""
    context: str
    line: int
    reason: str


ConversionResult = Found | Omitted


def flatten(results: Iterable[ConversionResult]) -> List[TxtASTNode]:
    """
    Collect the nodes of a sequence of results, dropping omitted elements.

    Args:
        results: Conversion results in document order

    Returns:
        The located nodes in document order
    """
    nodes: List[TxtASTNode] = []
    for result in results:
        if isinstance(result, Found):
            nodes.extend(result.nodes)

    return nodes
