"""
treecalc CLI.

Host application around the core pipeline: reads an expression from the
command line and prints the result, the token sequence, or the parse tree.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from treecalc.core.errors import TreecalcError
from treecalc.core.expression_lang.parser import parse
from treecalc.core.expression_lang.tokenizer import tokenize
from treecalc.core.graph_export import node_kind, tree_nodes
from treecalc.core.ir.expressions import Expr
from treecalc.core.pipeline import run_pipeline
from treecalc.core.settings import CalcSettings, load_settings

app = typer.Typer(
    help="Evaluate arithmetic expressions and inspect their tokens and parse trees.",
    no_args_is_help=True,
)

console = Console()

# Settings resolved by the callback
_settings: CalcSettings = CalcSettings()


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        from treecalc import __version__

        typer.echo(f"treecalc version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to treecalc.toml"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version"),
    ] = None,
) -> None:
    """Evaluate arithmetic expressions."""
    global _settings
    _settings = load_settings(config)
    logging.basicConfig(
        level=logging.DEBUG if verbose else _settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def format_number(value: float) -> str:
    """Render a result the way a calculator display would."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _fail(error: TreecalcError) -> NoReturn:
    typer.echo(f"Error: {error.message}")
    raise typer.Exit(code=1)


def _build_tree(expr: Expr) -> Tree:
    """Mirror an AST as a rich Tree."""
    root = Tree(f"[bold]{expr.symbol}[/bold] [dim]({node_kind(expr)})[/dim]")
    stack: list[tuple[Expr, Tree]] = [(expr, root)]
    while stack:
        node, branch = stack.pop()
        added = [
            (child, branch.add(f"[bold]{child.symbol}[/bold] [dim]({node_kind(child)})[/dim]"))
            for child in node.children
        ]
        stack.extend(reversed(added))
    return root


# =============================================================================
# Commands
# =============================================================================


@app.command(name="eval")
def eval_command(
    expression: Annotated[str, typer.Argument(help="Expression to evaluate")],
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Evaluate an expression and print the result."""
    try:
        result = run_pipeline(expression, _settings)
    except TreecalcError as e:
        _fail(e)

    if output_json:
        typer.echo(json.dumps({"expression": expression, "result": format_number(result.value)}))
        return
    typer.echo(f"Result: {format_number(result.value)}")


@app.command(name="tokens")
def tokens_command(
    expression: Annotated[str, typer.Argument(help="Expression to tokenize")],
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the token sequence of an expression."""
    try:
        tokens = tokenize(expression)
    except TreecalcError as e:
        _fail(e)

    if output_json:
        payload = [{"kind": str(t.kind), "text": t.text, "pos": t.pos} for t in tokens]
        typer.echo(json.dumps(payload))
        return

    table = Table(title=f"Tokens ({len(tokens)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Text", style="bold")
    table.add_column("Pos", justify="right")
    for index, token in enumerate(tokens):
        table.add_row(str(index), str(token.kind), token.text, str(token.pos))
    console.print(table)


@app.command(name="tree")
def tree_command(
    expression: Annotated[str, typer.Argument(help="Expression to parse")],
    output_json: Annotated[bool, typer.Option("--json", help="Output graph nodes as JSON")] = False,
) -> None:
    """Show the parse tree of an expression."""
    try:
        expr = parse(tokenize(expression), max_depth=_settings.max_depth)
    except TreecalcError as e:
        _fail(e)

    if output_json:
        typer.echo(json.dumps([node.model_dump() for node in tree_nodes(expr)]))
        return
    console.print(_build_tree(expr))


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
