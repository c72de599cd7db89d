"""A block-level parser for AsciiDoc."""

from adoc.adoc_attribute_list import AdocAttributeList
from adoc.adoc_element import (
    AdocAdmonition,
    AdocAuthor,
    AdocBlockContainer,
    AdocDescriptionList,
    AdocDocument,
    AdocDocumentHeader,
    AdocElement,
    AdocExample,
    AdocImage,
    AdocList,
    AdocListing,
    AdocListItem,
    AdocParagraph,
    AdocPreamble,
    AdocQuote,
    AdocSection,
    AdocSidebar,
    AdocTable,
    AdocTableCell,
    AdocToc,
    AdocUnhandledElement
)
from adoc.adoc_element_builder import AdocElementBuilder, AdocParseError
from adoc.adoc_lexer import AdocLexer
from adoc.adoc_token import AdocToken, AdocTokenType


__all__ = [
    "AdocAdmonition",
    "AdocAttributeList",
    "AdocAuthor",
    "AdocBlockContainer",
    "AdocDescriptionList",
    "AdocDocument",
    "AdocDocumentHeader",
    "AdocElement",
    "AdocElementBuilder",
    "AdocExample",
    "AdocImage",
    "AdocLexer",
    "AdocList",
    "AdocListing",
    "AdocListItem",
    "AdocParagraph",
    "AdocParseError",
    "AdocPreamble",
    "AdocQuote",
    "AdocSection",
    "AdocSidebar",
    "AdocTable",
    "AdocTableCell",
    "AdocToc",
    "AdocToken",
    "AdocTokenType",
    "AdocUnhandledElement"
]
