"""
Recursive descent parser for treecalc expressions.

Grammar (precedence low to high):
    expression  → term (("+" | "-") term)*
    term        → power (("*" | "/") power)*
    power       → factor ("^" factor)?
    factor      → NUMBER "!"*
                | FUNCTION "(" expression ")"
                | "(" expression ")"

Exponentiation is one-shot: ``2^3^2`` parses ``2^3`` and then fails on the
second ``^`` as a trailing token.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from treecalc.core.errors import ParseError, make_parse_error
from treecalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from treecalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    FuncCall,
    Number,
    PostfixExpr,
    PostfixOp,
)

logger = logging.getLogger(__name__)

# Nesting limit for groups, function arguments and factorial chains.
# Each group level costs four Python frames in the descent below.
DEFAULT_MAX_DEPTH = 100


class _Parser:
    """Recursive descent parser over a materialized token list."""

    def __init__(self, tokens: list[Token], max_depth: int) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def check(self, kind: TokenKind, *texts: str) -> bool:
        tok = self.current
        if tok is None or tok.kind != kind:
            return False
        return not texts or tok.text in texts

    def end_pos(self) -> int:
        """Offset just past the last token, used for end-of-input errors."""
        if not self.tokens:
            return 0
        last = self.tokens[-1]
        return last.pos + len(last.text)

    @contextmanager
    def nested(self) -> Iterator[None]:
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise ParseError(
                    f"Expression nested deeper than {self.max_depth} levels",
                    self._error_pos(),
                )
            yield
        finally:
            self.depth -= 1

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.check(TokenKind.OPERATOR, "+", "-"):
            op = BinaryOp(self.advance().text)
            right = self.parse_term()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """power (('*' | '/') power)*"""
        left = self.parse_power()
        while self.check(TokenKind.OPERATOR, "*", "/"):
            op = BinaryOp(self.advance().text)
            right = self.parse_power()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_power(self) -> Expr:
        """factor ('^' factor)?"""
        base = self.parse_factor()
        if self.check(TokenKind.POWER):
            self.advance()
            exponent = self.parse_factor()
            return BinaryExpr(op=BinaryOp.POW, left=base, right=exponent)
        return base

    def parse_factor(self) -> Expr:
        """NUMBER '!'* | FUNCTION '(' expression ')' | '(' expression ')'"""
        tok = self.current
        if tok is None:
            raise ParseError("Unexpected end of input", self.end_pos())

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            node: Expr = Number(text=tok.text)
            applied = 0
            while self.check(TokenKind.FACTORIAL):
                if self.depth + applied >= self.max_depth:
                    raise ParseError(
                        f"Expression nested deeper than {self.max_depth} levels",
                        self._error_pos(),
                    )
                self.advance()
                node = PostfixExpr(op=PostfixOp.FACTORIAL, operand=node)
                applied += 1
            return node

        if tok.kind == TokenKind.FUNCTION:
            return self._parse_func_call()

        if self.check(TokenKind.PARENTHESIS, "("):
            self.advance()
            with self.nested():
                expr = self.parse_expression()
            if not self.check(TokenKind.PARENTHESIS, ")"):
                raise ParseError("Expected closing parenthesis", self._error_pos())
            self.advance()
            return expr

        raise ParseError(f"Unexpected token: {tok.text}", tok.pos)

    def _parse_func_call(self) -> FuncCall:
        """FUNCTION '(' expression ')'"""
        name_tok = self.advance()
        if not self.check(TokenKind.PARENTHESIS, "("):
            raise ParseError(
                f"Expected '(' after function '{name_tok.text}'",
                self._error_pos(),
            )
        self.advance()

        with self.nested():
            arg = self.parse_expression()

        if not self.check(TokenKind.PARENTHESIS, ")"):
            raise ParseError("Expected ')' after function argument", self._error_pos())
        self.advance()
        return FuncCall(name=name_tok.text, arg=arg)

    def _error_pos(self) -> int:
        tok = self.current
        return tok.pos if tok else self.end_pos()


def parse(tokens: list[Token], *, max_depth: int = DEFAULT_MAX_DEPTH) -> Expr:
    """Parse a token list into an AST, consuming every token.

    Args:
        tokens: Output of :func:`tokenize`.
        max_depth: Maximum nesting of groups, function arguments and
            factorial applications.

    Returns:
        Root node of the parsed expression.

    Raises:
        ParseError: If the tokens do not form a single expression.
    """
    parser = _Parser(tokens, max_depth)
    expr = parser.parse_expression()

    # Ensure all tokens consumed
    tok = parser.current
    if tok is not None:
        raise ParseError(f"Unexpected token at the end of input: {tok.text}", tok.pos)

    logger.debug("Parsed %d tokens into %s", len(tokens), expr)
    return expr


def parse_expr(source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Expr:
    """Tokenize and parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "2 + 3 * 4")

    Returns:
        Parsed expression AST.

    Raises:
        ParseError: If the expression is invalid, with source context attached.
        LexError: If tokenization fails.
    """
    tokens = tokenize(source)
    try:
        return parse(tokens, max_depth=max_depth)
    except ParseError as e:
        raise make_parse_error(e.message, source, e.pos) from e
