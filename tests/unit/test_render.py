"""Tests for parenthesized rendering and the round-trip check."""

from __future__ import annotations

import pytest

from arith.core.calculator import check_round_trip, parse_expr
from arith.core.errors import LexicalError, StructuralError, StructuralProblem
from arith.core.expression_lang.render import read_rendered, render
from arith.core.ir import BinaryExpr, Literal, Operator
from arith.core.precedence import CONVENTIONAL_PRIORITIES
from arith.core.settings import EvaluatorSettings

EXPRESSIONS = [
    "42",
    "1 + 2",
    "1 + 2 * 3",
    "10 - 2 - 3",
    "1 + 2 / 3 * 4 - 1",
    "1 + 6 - 2 + 3",
    "100 / 7 * 7 + 100 - 7",
]


class TestRender:
    def test_render_literal(self) -> None:
        assert render(Literal(value=5)) == "5"

    def test_render_nested(self) -> None:
        expr = BinaryExpr(
            op=Operator.MUL,
            left=BinaryExpr(op=Operator.ADD, left=Literal(value=1), right=Literal(value=2)),
            right=Literal(value=3),
        )
        assert render(expr) == "((1 + 2) * 3)"


class TestReadRendered:
    def test_reads_nested(self) -> None:
        expr = read_rendered("((1 + 2) * 3)")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == Operator.MUL
        assert expr.left == BinaryExpr(
            op=Operator.ADD, left=Literal(value=1), right=Literal(value=2)
        )

    @pytest.mark.parametrize("source", EXPRESSIONS)
    def test_tree_survives_round_trip(self, source: str) -> None:
        expr = parse_expr(source)
        assert read_rendered(render(expr)) == expr

    @pytest.mark.parametrize(
        "text",
        ["", "1 + 2", "(1 + 2", "((1 + 2))", "(1 2)", "()", "(1 + 2))"],
    )
    def test_malformed_rendering(self, text: str) -> None:
        with pytest.raises(StructuralError) as exc_info:
            read_rendered(text)
        assert exc_info.value.problem in (
            StructuralProblem.MALFORMED_RENDERING,
            StructuralProblem.NOT_AN_OPERATOR,
        )

    def test_foreign_character(self) -> None:
        with pytest.raises(LexicalError):
            read_rendered("(1 + x)")

    def test_nesting_too_deep(self) -> None:
        text = "(1 + " * 5000 + "1" + ")" * 5000
        with pytest.raises(StructuralError) as exc_info:
            read_rendered(text)
        assert exc_info.value.problem == StructuralProblem.TOO_DEEP

    def test_render_deep_tree(self) -> None:
        expr: BinaryExpr | Literal = Literal(value=1)
        for _ in range(5000):
            expr = BinaryExpr(op=Operator.MUL, left=Literal(value=1), right=expr)
        text = render(expr)
        assert text.startswith("(1 * (1 * ")
        assert text.endswith("1" + ")" * 5000)


class TestCheckRoundTrip:
    @pytest.mark.parametrize("source", EXPRESSIONS)
    def test_values_match(self, source: str) -> None:
        outcome = check_round_trip(source)
        assert outcome.ok
        assert outcome.original == outcome.reread

    def test_conventional_table(self) -> None:
        settings = EvaluatorSettings(priorities=CONVENTIONAL_PRIORITIES)
        outcome = check_round_trip("6 - 1 + 2", settings)
        assert outcome.rendered == "(6 - (1 + 2))"
        assert outcome.original == 3
        assert outcome.ok
