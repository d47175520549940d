"""
End-to-end evaluation: text -> tokens -> tree -> number.

The first error raised by any stage propagates unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from treecalc.core.expression_lang.evaluator import evaluate
from treecalc.core.expression_lang.parser import parse
from treecalc.core.expression_lang.tokenizer import Token, tokenize
from treecalc.core.ir.expressions import Expr
from treecalc.core.settings import CalcSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Every data product of one evaluation."""

    source: str
    tokens: list[Token]
    tree: Expr
    value: float


def run_pipeline(source: str, settings: CalcSettings | None = None) -> PipelineResult:
    """Tokenize, parse and evaluate ``source``."""
    settings = settings or CalcSettings()

    tokens = tokenize(source)
    tree = parse(tokens, max_depth=settings.max_depth)
    value = evaluate(tree)

    logger.debug("%r = %r", source, value)
    return PipelineResult(source=source, tokens=tokens, tree=tree, value=value)


def calculate(source: str, settings: CalcSettings | None = None) -> float:
    """Evaluate an expression string to a number."""
    return run_pipeline(source, settings).value
