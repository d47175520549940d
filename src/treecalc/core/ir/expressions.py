"""
Expression tree types for treecalc.

One frozen model per node variant; arity is fixed by the model fields:

- Number: literal leaf, no children
- BinaryExpr: + - * / ^ with exactly [left, right]
- PostfixExpr: factorial (!) with exactly one operand
- FuncCall: sin / cos with exactly one argument
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class PostfixOp(StrEnum):
    """Postfix operators for expressions."""

    FACTORIAL = "!"


# Function names the parser can produce.
FUNCTION_NAMES = ("sin", "cos")


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Number(BaseModel):
    """A numeric literal, kept as its source text."""

    text: str = Field(description="Literal text, e.g. '3.14'")

    model_config = ConfigDict(frozen=True)

    @property
    def symbol(self) -> str:
        return self.text

    @property
    def children(self) -> tuple[Expr, ...]:
        return ()

    def __str__(self) -> str:
        return self.text


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    @property
    def symbol(self) -> str:
        return str(self.op)

    @property
    def children(self) -> tuple[Expr, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"({self.left} {self.op} {self.right})"


class PostfixExpr(BaseModel):
    """Postfix operation: operand op."""

    op: PostfixOp = PostfixOp.FACTORIAL
    operand: Expr

    model_config = ConfigDict(frozen=True)

    @property
    def symbol(self) -> str:
        return str(self.op)

    @property
    def children(self) -> tuple[Expr, ...]:
        return (self.operand,)

    def __str__(self) -> str:
        return f"{self.operand}{self.op}"


class FuncCall(BaseModel):
    """
    Function call with a single argument: name(arg).

    Built-in functions: sin, cos (radians).
    """

    name: str = Field(description="Function name")
    arg: Expr = Field(description="Argument expression")

    model_config = ConfigDict(frozen=True)

    @property
    def symbol(self) -> str:
        return self.name

    @property
    def children(self) -> tuple[Expr, ...]:
        return (self.arg,)

    def __str__(self) -> str:
        return f"{self.name}({self.arg})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Number | BinaryExpr | PostfixExpr | FuncCall

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
PostfixExpr.model_rebuild()
FuncCall.model_rebuild()
