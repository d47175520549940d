"""
treecalc Intermediate Representation (IR) types.

Expression tree nodes produced by the parser and consumed by the
evaluator and the graph export.
"""

from .expressions import (
    FUNCTION_NAMES,
    BinaryExpr,
    BinaryOp,
    Expr,
    FuncCall,
    Number,
    PostfixExpr,
    PostfixOp,
)

__all__ = [
    "FUNCTION_NAMES",
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "FuncCall",
    "Number",
    "PostfixExpr",
    "PostfixOp",
]
