"""
Expression evaluator for treecalc.

Reduces an expression AST to a float. Pure evaluation with no I/O and no
side effects. Does NOT use Python's eval().

The walk uses an explicit work stack rather than Python recursion, so tree
depth is not limited by the interpreter's recursion limit. Operands are
always reduced left before right.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from treecalc.core.errors import EvalError
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

# Largest n whose factorial is a finite double.
_MAX_FINITE_FACTORIAL = 170


def evaluate(expr: Expr) -> float:
    """Evaluate an expression tree to a number.

    Division by zero follows IEEE-754 (signed infinity or NaN) instead of
    raising.

    Args:
        expr: Parsed expression AST.

    Returns:
        The computed value.

    Raises:
        EvalError: On an invalid literal, an unknown function or operator,
            or a factorial outside the non-negative integers.
    """
    # (node, expanded) pairs; a node is reduced once its children are on `values`.
    stack: list[tuple[Expr, bool]] = [(expr, False)]
    values: list[float] = []

    while stack:
        node, expanded = stack.pop()

        if isinstance(node, Number):
            values.append(_interpret_number(node))
            continue

        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(_children(node)))
            continue

        if isinstance(node, BinaryExpr):
            right = values.pop()
            left = values.pop()
            values.append(_interpret_binary(node, left, right))
        elif isinstance(node, PostfixExpr):
            values.append(_interpret_postfix(node, values.pop()))
        else:
            values.append(_interpret_func_call(node, values.pop()))

    result = values.pop()
    logger.debug("Evaluated %s to %r", type(expr).__name__, result)
    return result


def _children(node: Expr) -> tuple[Expr, ...]:
    """Child nodes in evaluation order."""
    if isinstance(node, (Number, BinaryExpr, PostfixExpr, FuncCall)):
        return node.children
    raise EvalError(f"Unknown expression type: {type(node).__name__}")


def _interpret_number(expr: Number) -> float:
    try:
        return float(expr.text)
    except ValueError:
        raise EvalError(f"Invalid number literal: {expr.text!r}") from None


# ---------------------------------------------------------------------------
# Binary operators
# ---------------------------------------------------------------------------


def _divide(left: float, right: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity, 0/0 is NaN."""
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _is_odd_integer(value: float) -> bool:
    return value.is_integer() and value % 2 == 1


def _power(base: float, exponent: float) -> float:
    """IEEE-754 pow: overflow is a signed infinity, 0^-n is infinity."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0:
            # 0 raised to a negative power
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # negative base, fractional exponent
        return math.nan


_BINARY_OPS: dict[str, Callable[[float, float], float]] = {
    BinaryOp.ADD: lambda a, b: a + b,
    BinaryOp.SUB: lambda a, b: a - b,
    BinaryOp.MUL: lambda a, b: a * b,
    BinaryOp.DIV: _divide,
    BinaryOp.POW: _power,
}


def _interpret_binary(expr: BinaryExpr, left: float, right: float) -> float:
    func = _BINARY_OPS.get(expr.op)
    if func is None:
        raise EvalError(f"Unknown operator: {expr.op}")
    return func(left, right)


# ---------------------------------------------------------------------------
# Postfix operators
# ---------------------------------------------------------------------------


def _factorial(n: int) -> float:
    """Iterative n! as a float; saturates to infinity past 170!."""
    if n > _MAX_FINITE_FACTORIAL:
        return math.inf
    result = 1.0
    for k in range(2, n + 1):
        result *= k
    return result


def _interpret_postfix(expr: PostfixExpr, value: float) -> float:
    if expr.op != PostfixOp.FACTORIAL:
        raise EvalError(f"Unknown operator: {expr.op}")
    if not value.is_integer() or value < 0:
        raise EvalError("Factorial is defined for non-negative integers only")
    return _factorial(int(value))


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sin": math.sin,
    "cos": math.cos,
}


def _interpret_func_call(expr: FuncCall, value: float) -> float:
    """Apply a built-in function (closed set, radians)."""
    func = _FUNCTIONS.get(expr.name)
    if func is None:
        raise EvalError(f"Unknown function: {expr.name}")
    try:
        return func(value)
    except ValueError:
        # sin/cos of an infinity
        return math.nan
