"""
treecalc - embeddable arithmetic expression evaluator.

Scans, parses and evaluates expressions such as ``sin((1+1)*0) + 5!``
and exports the token sequence and parse tree for display.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import ir
from .core.errors import EvalError, LexError, ParseError, TreecalcError
from .core.expression_lang import evaluate, parse, parse_expr, tokenize
from .core.pipeline import calculate, run_pipeline


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    # Fall back to installed metadata
    try:
        return _metadata_version("treecalc")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "TreecalcError",
    "LexError",
    "ParseError",
    "EvalError",
    "tokenize",
    "parse",
    "parse_expr",
    "evaluate",
    "calculate",
    "run_pipeline",
]
