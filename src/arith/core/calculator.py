"""
Entry points for arith: text in, integer or error out.

Usage:
    from arith import evaluate

    evaluate("1230 + 24")
    # 1254
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from arith.core.expression_lang.builder import build_tree
from arith.core.expression_lang.evaluator import eval_tree
from arith.core.expression_lang.render import read_rendered, render
from arith.core.expression_lang.tokenizer import Token, tokenize
from arith.core.ir import Expr
from arith.core.settings import DEFAULT_SETTINGS, EvaluatorSettings

logger = logging.getLogger(__name__)


def tokenize_with(source: str, settings: EvaluatorSettings | None = None) -> list[Token]:
    """Tokenize ``source`` using the policy and literal limit from ``settings``."""
    settings = settings or DEFAULT_SETTINGS
    return tokenize(source, policy=settings.unknown_chars, max_value=settings.max_literal)


def parse_expr(source: str, settings: EvaluatorSettings | None = None) -> Expr:
    """Parse an expression string into a tree.

    Raises:
        LexicalError: If tokenization fails.
        StructuralError: If the tokens do not form an expression.
    """
    settings = settings or DEFAULT_SETTINGS
    tokens = tokenize_with(source, settings)
    expr = build_tree(tokens, settings.priorities, source)
    logger.debug("Parsed %r as %s", source, expr)
    return expr


def evaluate(source: str, settings: EvaluatorSettings | None = None) -> int:
    """Evaluate an expression string.

    Args:
        source: Expression text, e.g. ``"1 + 2"``.
        settings: Tokenizer policy, priority table and integer width.

    Returns:
        The integer result.

    Raises:
        LexicalError: Unrecognized character or oversized literal.
        StructuralError: Malformed expression, including the empty string.
        ArithmeticEvalError: Division by zero or integer overflow.
    """
    settings = settings or DEFAULT_SETTINGS
    expr = parse_expr(source, settings)
    return eval_tree(expr, int_bits=settings.int_bits)


@dataclass(frozen=True)
class RoundTrip:
    """Outcome of rendering a tree and reading it back."""

    rendered: str
    original: int
    reread: int

    @property
    def ok(self) -> bool:
        return self.original == self.reread


def check_round_trip(source: str, settings: EvaluatorSettings | None = None) -> RoundTrip:
    """Parse ``source``, render the tree, re-read it, and compare both results.

    Raises:
        EvaluationError: If ``source`` itself fails to parse or evaluate.
    """
    settings = settings or DEFAULT_SETTINGS
    expr = parse_expr(source, settings)
    rendered = render(expr)
    reread = read_rendered(rendered)
    result = RoundTrip(
        rendered=rendered,
        original=eval_tree(expr, int_bits=settings.int_bits),
        reread=eval_tree(reread, int_bits=settings.int_bits),
    )
    if not result.ok:
        logger.warning("Round trip mismatch for %r: %d != %d", source, result.original, result.reread)
    return result
