"""
Error types for treecalc scanning, parsing, and evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass


class TreecalcError(Exception):
    """Base exception for all treecalc errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class LexError(TreecalcError):
    """
    Raised when no lexical rule matches at the scan position.

    Examples:
    - Letters outside the ``sin``/``cos`` keywords
    - Stray punctuation such as ``%`` or ``,``
    - A trailing decimal point (``1.``)
    """

    def __init__(
        self,
        message: str,
        char: str,
        pos: int,
        context: ErrorContext | None = None,
    ):
        self.char = char
        self.pos = pos
        super().__init__(message, context)


class ParseError(TreecalcError):
    """
    Raised when a token sequence does not match the grammar.

    Examples:
    - Unexpected end of input
    - Missing closing parenthesis
    - Function name without an argument list
    - Trailing tokens after a complete expression
    """

    def __init__(self, message: str, pos: int = 0, context: ErrorContext | None = None):
        self.pos = pos
        super().__init__(message, context)


class EvalError(TreecalcError):
    """
    Raised when a tree cannot be reduced to a number.

    Examples:
    - Factorial of a negative or fractional value
    - Unknown function or operator in a hand-built tree
    """

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        source: The full expression text
        pos: 0-based offset of the offending character
    """

    source: str
    pos: int

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            The position followed by the source with a caret marker, e.g.::

                position 4
                   1 + x
                       ^
        """
        if not self.source:
            return f"position {self.pos}"
        return f"position {self.pos}\n{self._format_snippet()}"

    def _format_snippet(self) -> str:
        """Render the source line with a caret under the error column."""
        prefix = "   "
        marker_pos = len(prefix) + min(self.pos, len(self.source))
        return f"{prefix}{self.source}\n{' ' * marker_pos}^"


def make_parse_error(message: str, source: str, pos: int) -> ParseError:
    """
    Helper to create a ParseError with source context.

    Args:
        message: Error description
        source: Expression text being parsed
        pos: Offset of the offending token

    Returns:
        ParseError carrying an ErrorContext
    """
    return ParseError(message, pos, ErrorContext(source=source, pos=pos))
