"""Core treecalc functionality: tokenizer, parser, evaluator, graph export, settings."""

from . import ir
from .errors import ErrorContext, EvalError, LexError, ParseError, TreecalcError
from .expression_lang import Token, TokenKind, evaluate, parse, parse_expr, tokenize
from .graph_export import GraphNode, edges, token_nodes, tree_nodes
from .pipeline import PipelineResult, calculate, run_pipeline
from .settings import CalcSettings, load_settings

__all__ = [
    "ir",
    "TreecalcError",
    "LexError",
    "ParseError",
    "EvalError",
    "ErrorContext",
    "Token",
    "TokenKind",
    "tokenize",
    "parse",
    "parse_expr",
    "evaluate",
    "GraphNode",
    "tree_nodes",
    "token_nodes",
    "edges",
    "PipelineResult",
    "run_pipeline",
    "calculate",
    "CalcSettings",
    "load_settings",
]
