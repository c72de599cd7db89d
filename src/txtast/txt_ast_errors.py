"""Exceptions raised by the text AST converter, validator and configuration."""

from typing import List, Tuple


class TxtASTConversionError(Exception):
    """Base class for errors that abort a conversion."""
    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"{message}: line {line}")
        self.message: str = message
        self.line: int = line


class AdocInvalidAdmonitionError(TxtASTConversionError):
    """Exception raised for an admonition that has neither blocks nor any text to locate."""


class TxtASTValidationError(Exception):
    """Exception raised when a converted tree breaks a structural rule."""
    def __init__(self, message: str, node_type: str, node_range: Tuple[int, int] | None = None) -> None:
        super().__init__(f"{node_type}: {message}")
        self.message: str = message
        self.node_type: str = node_type
        self.node_range = node_range


class AdocConverterConfigError(Exception):
    """Exception raised for an invalid converter configuration."""
    def __init__(self, errors: List[str]) -> None:
        super().__init__("Invalid configuration: " + "; ".join(errors))
        self.errors = errors
