"""Conversion of AsciiDoc into a text AST whose nodes carry exact source locations."""

from txtast.adoc_txt_ast_converter import AdocTxtASTConverter, parse
from txtast.conversion_result import ConversionResult, Found, Omitted
from txtast.converter_config import AdocConverterConfig
from txtast.search_window import SearchWindow
from txtast.source_index import SourceIndex
from txtast.span_locator import SpanLocator
from txtast.txt_ast_errors import (
    AdocConverterConfigError,
    AdocInvalidAdmonitionError,
    TxtASTConversionError,
    TxtASTValidationError
)
from txtast.txt_ast_node import (
    TxtASTAdmonitionNode,
    TxtASTAttributeNode,
    TxtASTAttributesNode,
    TxtASTAuthorEmailNode,
    TxtASTAuthorNameNode,
    TxtASTAuthorNode,
    TxtASTBlockQuoteNode,
    TxtASTBlockTitleNode,
    TxtASTCodeBlockNode,
    TxtASTDocumentNode,
    TxtASTHeaderNode,
    TxtASTIDNode,
    TxtASTImageNode,
    TxtASTListItemNode,
    TxtASTListNode,
    TxtASTLocation,
    TxtASTNode,
    TxtASTParagraphNode,
    TxtASTPosition,
    TxtASTSidebarNode,
    TxtASTStrNode,
    TxtASTTableCellNode,
    TxtASTTableNode,
    TxtASTTableRowNode,
    TxtASTTOCNode,
    TxtASTVisitor
)
from txtast.txt_ast_printer import TxtASTPrinter
from txtast.txt_ast_serializer import TxtASTSerializer, serialize, to_json
from txtast.txt_ast_validator import TxtASTValidator


__all__ = [
    "AdocConverterConfig",
    "AdocConverterConfigError",
    "AdocInvalidAdmonitionError",
    "AdocTxtASTConverter",
    "ConversionResult",
    "Found",
    "Omitted",
    "SearchWindow",
    "SourceIndex",
    "SpanLocator",
    "TxtASTAdmonitionNode",
    "TxtASTAttributeNode",
    "TxtASTAttributesNode",
    "TxtASTAuthorEmailNode",
    "TxtASTAuthorNameNode",
    "TxtASTAuthorNode",
    "TxtASTBlockQuoteNode",
    "TxtASTBlockTitleNode",
    "TxtASTCodeBlockNode",
    "TxtASTConversionError",
    "TxtASTDocumentNode",
    "TxtASTHeaderNode",
    "TxtASTIDNode",
    "TxtASTImageNode",
    "TxtASTListItemNode",
    "TxtASTListNode",
    "TxtASTLocation",
    "TxtASTNode",
    "TxtASTParagraphNode",
    "TxtASTPosition",
    "TxtASTPrinter",
    "TxtASTSerializer",
    "TxtASTSidebarNode",
    "TxtASTStrNode",
    "TxtASTTableCellNode",
    "TxtASTTableNode",
    "TxtASTTableRowNode",
    "TxtASTTOCNode",
    "TxtASTValidationError",
    "TxtASTValidator",
    "TxtASTVisitor",
    "parse",
    "serialize",
    "to_json"
]
