"""
Entry points for converting AsciiDoc text into a located text AST.
"""

import logging

from adoc.adoc_element import AdocDocument
from adoc.adoc_element_builder import AdocElementBuilder
from txtast.adoc_txt_ast_tree_walker import AdocTxtASTTreeWalker
from txtast.converter_config import AdocConverterConfig
from txtast.source_index import SourceIndex
from txtast.txt_ast_node import TxtASTDocumentNode


class AdocTxtASTConverter:
    """
    Converts AsciiDoc documents into text AST trees whose nodes carry exact source spans.

    Each conversion builds its own source index and walker; nothing is shared between calls.
    """

    def __init__(self, config: AdocConverterConfig | None = None) -> None:
        """
        Initialize the converter.

        Args:
            config: Converter configuration; defaults are used if not given
        """
        self._config = config if config is not None else AdocConverterConfig.create_default()
        self._logger = logging.getLogger("AdocTxtASTConverter")

    @property
    def config(self) -> AdocConverterConfig:
        """The configuration used by this converter."""
        return self._config

    def convert_document(self, document: AdocDocument, text: str) -> TxtASTDocumentNode:
        """
        Convert an already parsed document.

        Args:
            document: The semantic document parsed from text
            text: The source text the document was parsed from

        Returns:
            The located document node

        Raises:
            AdocInvalidAdmonitionError: If the document holds an admonition with no content
        """
        walker = AdocTxtASTTreeWalker(SourceIndex(text), self._config)
        node = walker.convert_root(document)
        self._logger.debug("Converted document: %d top-level nodes, range %s", len(node.children), node.range)
        return node

    def convert(self, text: str) -> TxtASTDocumentNode:
        """
        Parse and convert AsciiDoc text.

        Args:
            text: The AsciiDoc source

        Returns:
            The located document node
        """
        document = AdocElementBuilder(self._config.comment_marker).build(text)
        return self.convert_document(document, text)


def parse(text: str, config: AdocConverterConfig | None = None) -> TxtASTDocumentNode:
    """
    Parse AsciiDoc text into a located text AST.

    Args:
        text: The AsciiDoc source
        config: Optional converter configuration

    Returns:
        The root Document node
    """
    return AdocTxtASTConverter(config).convert(text)
