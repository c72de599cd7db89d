from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import Dict


class AdocTokenType(IntEnum):
    """
    Enum-like class representing the different kinds of AsciiDoc source lines.
    """
    BLANK = auto()
    COMMENT = auto()
    COMMENT_BLOCK_DELIMITER = auto()
    ATTRIBUTE_ENTRY = auto()
    SECTION_TITLE = auto()
    BLOCK_TITLE = auto()
    BLOCK_ANCHOR = auto()
    BLOCK_ATTRIBUTES = auto()
    BLOCK_DELIMITER = auto()
    TABLE_DELIMITER = auto()
    FENCE = auto()
    ULIST_ITEM = auto()
    OLIST_ITEM = auto()
    COLIST_ITEM = auto()
    DLIST_TERM = auto()
    LIST_CONTINUATION = auto()
    BLOCK_MACRO = auto()
    ADMONITION_PARAGRAPH = auto()
    THEMATIC_BREAK = auto()
    PAGE_BREAK = auto()
    INDENTED_TEXT = auto()
    TEXT = auto()


@dataclass(frozen=True)
class AdocToken:
    """
    Represents a single classified line of AsciiDoc source.

    Attributes:
        type (AdocTokenType): The kind of line.
        value (str): The meaningful payload of the line (title text, item text, delimiter, ...).
        input (str): The entire source line, without its line terminator.
        line (int): The 1-based line number of the line.
        marker (str): The list marker, delimiter or macro name, when the line has one.
        extra (Dict[str, str]): Additional named parts extracted from the line.
    """
    type: AdocTokenType
    value: str
    input: str
    line: int
    marker: str = ""
    extra: Dict[str, str] = field(default_factory=dict)
