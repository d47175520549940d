"""
treecalc expression language.

Tokenizer, parser, and evaluator for arithmetic expressions with
+ - * / ^, postfix factorial, grouping, sin and cos.

Usage:
    from treecalc.core.expression_lang import parse_expr, evaluate

    expr = parse_expr("2 + 3 * 4")
    result = evaluate(expr)
    # result == 14.0
"""

from treecalc.core.expression_lang.evaluator import evaluate
from treecalc.core.expression_lang.parser import DEFAULT_MAX_DEPTH, parse, parse_expr
from treecalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "Token",
    "TokenKind",
    "evaluate",
    "parse",
    "parse_expr",
    "tokenize",
]
