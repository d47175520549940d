"""
Graph export for token sequences and expression trees.

Projects the public token and AST structures onto flat node lists that a
graph-drawing component can consume. Each node carries an id, a two-line
label ``"<text>\\n(<KIND>)"`` and the id of the node it hangs from.

Usage:
    from treecalc.core.graph_export import edges, tree_nodes

    nodes = tree_nodes(parse_expr("2 + 3"))
    # [GraphNode(id=0, label='+\\n(OPERATOR)', parent_id=None), ...]
    edges(nodes)
    # [(0, 1), (0, 2)]
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from treecalc.core.expression_lang.tokenizer import Token, TokenKind
from treecalc.core.ir.expressions import BinaryExpr, BinaryOp, Expr, FuncCall, Number


class GraphNode(BaseModel):
    """One vertex of an exported graph."""

    id: int
    label: str
    parent_id: int | None = None

    model_config = ConfigDict(frozen=True)


def node_kind(expr: Expr) -> TokenKind:
    """The token kind a tree node was built from."""
    if isinstance(expr, Number):
        return TokenKind.NUMBER
    if isinstance(expr, FuncCall):
        return TokenKind.FUNCTION
    if isinstance(expr, BinaryExpr):
        return TokenKind.POWER if expr.op == BinaryOp.POW else TokenKind.OPERATOR
    return TokenKind.FACTORIAL


def _label(text: str, kind: TokenKind) -> str:
    return f"{text}\n({kind})"


def tree_nodes(expr: Expr) -> list[GraphNode]:
    """Export an expression tree in pre-order, ids assigned in visit order."""
    nodes: list[GraphNode] = []
    stack: list[tuple[Expr, int | None]] = [(expr, None)]

    while stack:
        node, parent_id = stack.pop()
        node_id = len(nodes)
        nodes.append(
            GraphNode(
                id=node_id,
                label=_label(node.symbol, node_kind(node)),
                parent_id=parent_id,
            )
        )
        stack.extend((child, node_id) for child in reversed(node.children))

    return nodes


def token_nodes(tokens: list[Token]) -> list[GraphNode]:
    """Export tokens left to right, each chained to its predecessor."""
    return [
        GraphNode(
            id=index,
            label=_label(token.text, token.kind),
            parent_id=index - 1 if index > 0 else None,
        )
        for index, token in enumerate(tokens)
    ]


def edges(nodes: list[GraphNode]) -> list[tuple[int, int]]:
    """(from, to) pairs for every node that has a parent."""
    return [(node.parent_id, node.id) for node in nodes if node.parent_id is not None]
