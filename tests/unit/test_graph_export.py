"""Tests for exporting tokens and trees as graph node lists."""

from __future__ import annotations

from treecalc.core.expression_lang.parser import parse_expr
from treecalc.core.expression_lang.tokenizer import TokenKind, tokenize
from treecalc.core.graph_export import GraphNode, edges, node_kind, token_nodes, tree_nodes
from treecalc.core.ir.expressions import BinaryExpr, BinaryOp, Number


class TestTreeNodes:
    """tree_nodes walks the AST in pre-order."""

    def test_preorder_ids_and_parents(self) -> None:
        nodes = tree_nodes(parse_expr("2+3*4"))
        assert nodes == [
            GraphNode(id=0, label="+\n(OPERATOR)", parent_id=None),
            GraphNode(id=1, label="2\n(NUMBER)", parent_id=0),
            GraphNode(id=2, label="*\n(OPERATOR)", parent_id=0),
            GraphNode(id=3, label="3\n(NUMBER)", parent_id=2),
            GraphNode(id=4, label="4\n(NUMBER)", parent_id=2),
        ]

    def test_every_kind_labelled(self) -> None:
        nodes = tree_nodes(parse_expr("sin(2^3!)"))
        assert [n.label for n in nodes] == [
            "sin\n(FUNCTION)",
            "^\n(POWER)",
            "2\n(NUMBER)",
            "!\n(FACTORIAL)",
            "3\n(NUMBER)",
        ]
        assert [n.parent_id for n in nodes] == [None, 0, 1, 1, 3]

    def test_single_leaf(self) -> None:
        assert tree_nodes(parse_expr("7")) == [GraphNode(id=0, label="7\n(NUMBER)")]

    def test_deep_tree_does_not_recurse(self) -> None:
        expr = Number(text="0")
        for _ in range(3000):
            expr = BinaryExpr(op=BinaryOp.SUB, left=expr, right=Number(text="1"))
        nodes = tree_nodes(expr)
        assert len(nodes) == 6001
        assert nodes[-1].label == "1\n(NUMBER)"


class TestTokenNodes:
    """token_nodes chains tokens left to right."""

    def test_sequential_chain(self) -> None:
        nodes = token_nodes(tokenize("1 + 2"))
        assert [n.id for n in nodes] == [0, 1, 2]
        assert [n.parent_id for n in nodes] == [None, 0, 1]
        assert nodes[1].label == "+\n(OPERATOR)"

    def test_empty(self) -> None:
        assert token_nodes([]) == []


class TestEdges:
    def test_tree_edges(self) -> None:
        assert edges(tree_nodes(parse_expr("2+3*4"))) == [(0, 1), (0, 2), (2, 3), (2, 4)]

    def test_token_edges(self) -> None:
        assert edges(token_nodes(tokenize("cos(0)"))) == [(0, 1), (1, 2), (2, 3)]


def test_node_kind_matches_source_token() -> None:
    expr = parse_expr("(1-2)/3")
    assert node_kind(expr) == TokenKind.OPERATOR
    assert node_kind(parse_expr("1^2")) == TokenKind.POWER


def test_nodes_serialize() -> None:
    dumped = [n.model_dump() for n in tree_nodes(parse_expr("1!"))]
    assert dumped == [
        {"id": 0, "label": "!\n(FACTORIAL)", "parent_id": None},
        {"id": 1, "label": "1\n(NUMBER)", "parent_id": 0},
    ]
