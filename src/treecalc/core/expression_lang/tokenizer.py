"""
Tokenizer for treecalc expressions.

Converts an expression string into a sequence of typed tokens.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum

from treecalc.core.errors import ErrorContext, LexError

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"  # + - * /
    PARENTHESIS = "PARENTHESIS"  # ( )
    POWER = "POWER"  # ^
    FACTORIAL = "FACTORIAL"  # !
    FUNCTION = "FUNCTION"  # sin cos


@dataclass(frozen=True, slots=True)
class Token:
    """A single token from the expression tokenizer."""

    kind: TokenKind
    text: str
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r}, pos={self.pos})"


# Rules are tried in order; the first match at the cursor wins.
# A rule with kind None consumes input without emitting a token.
_RULES: tuple[tuple[re.Pattern[str], TokenKind | None], ...] = (
    (re.compile(r"[0-9]+(\.[0-9]+)?"), TokenKind.NUMBER),
    (re.compile(r"[+\-*/]"), TokenKind.OPERATOR),
    (re.compile(r"[()]"), TokenKind.PARENTHESIS),
    (re.compile(r"\^"), TokenKind.POWER),
    (re.compile(r"!"), TokenKind.FACTORIAL),
    (re.compile(r"sin\b"), TokenKind.FUNCTION),
    (re.compile(r"cos\b"), TokenKind.FUNCTION),
    (re.compile(r"\s+"), None),
)


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Raises:
        LexError: If no rule matches at some position.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        for pattern, kind in _RULES:
            m = pattern.match(source, i)
            if m is None:
                continue
            if kind is not None:
                tokens.append(Token(kind, m.group(0), i))
            i = m.end()
            break
        else:
            c = source[i]
            raise LexError(
                f"Unexpected character: {c!r} at position {i}",
                char=c,
                pos=i,
                context=ErrorContext(source=source, pos=i),
            )

    logger.debug("Tokenized %r into %d tokens", source, len(tokens))
    return tokens
