"""Tests for the treecalc CLI."""

from __future__ import annotations

import json
import math
from pathlib import Path

import pytest
from typer.testing import CliRunner

from treecalc.cli import app, format_number

runner = CliRunner()


# ---------------------------------------------------------------------------
# treecalc eval
# ---------------------------------------------------------------------------


class TestEval:
    def test_result(self) -> None:
        result = runner.invoke(app, ["eval", "2+3*4"])
        assert result.exit_code == 0
        assert "Result: 14" in result.output

    def test_division_by_zero(self) -> None:
        result = runner.invoke(app, ["eval", "1/0"])
        assert result.exit_code == 0
        assert "Result: Infinity" in result.output

    def test_json(self) -> None:
        result = runner.invoke(app, ["eval", "5!", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"expression": "5!", "result": "120"}

    def test_parse_error(self) -> None:
        result = runner.invoke(app, ["eval", "(1+2"])
        assert result.exit_code == 1
        assert "Error: Expected closing parenthesis" in result.output

    def test_lex_error(self) -> None:
        result = runner.invoke(app, ["eval", "1 + x"])
        assert result.exit_code == 1
        assert "Unexpected character: 'x'" in result.output

    def test_eval_error(self) -> None:
        result = runner.invoke(app, ["eval", "3.5!"])
        assert result.exit_code == 1
        assert "non-negative integers only" in result.output

    def test_config_depth_limit(self, tmp_path: Path) -> None:
        config = tmp_path / "treecalc.toml"
        config.write_text("[treecalc]\nmax_depth = 1\n")
        result = runner.invoke(app, ["--config", str(config), "eval", "((1))"])
        assert result.exit_code == 1
        assert "nested deeper than 1 levels" in result.output


# ---------------------------------------------------------------------------
# treecalc tokens / tree
# ---------------------------------------------------------------------------


class TestTokens:
    def test_table(self) -> None:
        result = runner.invoke(app, ["tokens", "sin(0)"])
        assert result.exit_code == 0
        assert "FUNCTION" in result.output
        assert "PARENTHESIS" in result.output

    def test_json(self) -> None:
        result = runner.invoke(app, ["tokens", "2 ^ 3", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"kind": "NUMBER", "text": "2", "pos": 0},
            {"kind": "POWER", "text": "^", "pos": 2},
            {"kind": "NUMBER", "text": "3", "pos": 4},
        ]

    def test_tokens_of_unparseable_input(self) -> None:
        # Tokenizing succeeds even when the grammar would reject the input.
        result = runner.invoke(app, ["tokens", "2 3", "--json"])
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 2


class TestTree:
    def test_render(self) -> None:
        result = runner.invoke(app, ["tree", "2+3!"])
        assert result.exit_code == 0
        assert "OPERATOR" in result.output
        assert "FACTORIAL" in result.output

    def test_json(self) -> None:
        result = runner.invoke(app, ["tree", "cos(0)", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"id": 0, "label": "cos\n(FUNCTION)", "parent_id": None},
            {"id": 1, "label": "0\n(NUMBER)", "parent_id": 0},
        ]

    def test_chained_power(self) -> None:
        result = runner.invoke(app, ["tree", "2^3^2"])
        assert result.exit_code == 1
        assert "Unexpected token at the end of input: ^" in result.output


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "treecalc version" in result.output


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (14.0, "14"),
        (-3.0, "-3"),
        (0.5, "0.5"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        (math.nan, "NaN"),
        (1e20, "1e+20"),
    ],
)
def test_format_number(value: float, expected: str) -> None:
    assert format_number(value) == expected
