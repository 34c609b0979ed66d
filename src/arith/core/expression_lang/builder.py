"""
Expression tree builder for arith.

Turns a flat token list into a binary tree by repeatedly partitioning it
around an operator, without an operator-precedence stack:

    build(tokens, level):
        a single NUMBER token          → Literal
        first operator with priority
        == level, scanning left→right  → BinaryExpr(build(left, next), op, build(right, next))
        none at this level             → retry at next level (cyclic)
        every level tried once         → StructuralError

The top-level call starts at the lowest level; both halves of a split start
at the level after the one that split them. Because the scan always takes
the leftmost match, a run of same-level operators groups to the right:
``10 - 2 - 3`` builds ``(10 - (2 - 3))``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import cast

from arith.core.errors import StructuralProblem, make_structural_error
from arith.core.expression_lang.tokenizer import Token, TokenKind
from arith.core.ir import BinaryExpr, Expr, Literal, Operator
from arith.core.precedence import REFERENCE_PRIORITIES, PriorityTable

logger = logging.getLogger(__name__)


def build_tree(
    tokens: Sequence[Token],
    priorities: PriorityTable = REFERENCE_PRIORITIES,
    source: str | None = None,
) -> Expr:
    """Build an expression tree from a token sequence.

    Args:
        tokens: Output of ``tokenize()``.
        priorities: Operator priority table to split by.
        source: Original text, attached to errors for display.

    Returns:
        Root of the expression tree.

    Raises:
        StructuralError: If the tokens are not an alternating
            literal/operator sequence starting and ending with a literal.
    """
    check_shape(tokens, source)
    return _build(list(tokens), priorities.lowest(), priorities, source)


def check_shape(tokens: Sequence[Token], source: str | None = None) -> None:
    """Reject token sequences that cannot alternate literal/operator.

    Each kind of malformation gets its own ``StructuralProblem`` so callers
    can tell an empty expression from, say, ``1 + * 2``.
    """
    if not tokens:
        raise make_structural_error("Empty expression", StructuralProblem.EMPTY)

    for tok in tokens:
        if tok.kind != TokenKind.NUMBER and not tok.is_operator:
            raise make_structural_error(
                f"Unexpected token {tok.kind}", StructuralProblem.NOT_AN_OPERATOR, tok.pos, source
            )

    first, last = tokens[0], tokens[-1]
    if first.is_operator:
        raise make_structural_error(
            f"Expression starts with operator '{Operator.from_token(first).value}'",
            StructuralProblem.LEADING_OPERATOR,
            first.pos,
            source,
        )
    if last.is_operator:
        raise make_structural_error(
            f"Expression ends with operator '{Operator.from_token(last).value}'",
            StructuralProblem.TRAILING_OPERATOR,
            last.pos,
            source,
        )

    for prev, tok in zip(tokens, tokens[1:]):
        if prev.is_operator and tok.is_operator:
            raise make_structural_error(
                f"Operator '{Operator.from_token(tok).value}' follows another operator",
                StructuralProblem.ADJACENT_OPERATORS,
                tok.pos,
                source,
            )
        if not prev.is_operator and not tok.is_operator:
            raise make_structural_error(
                f"Literal {tok.value} follows literal {prev.value} with no operator between",
                StructuralProblem.ADJACENT_LITERALS,
                tok.pos,
                source,
            )


def _build(
    tokens: list[Token],
    level: int,
    priorities: PriorityTable,
    source: str | None,
) -> Expr:
    """Partitioning step; assumes nothing about ``tokens``.

    Spans are processed from an explicit work stack rather than by
    recursion: a same-level chain yields a right-deep tree as deep as the
    input is long. A span is ``(start, end, level)``; an ``Operator`` on the
    stack joins the two most recently built subtrees.
    """
    built: list[Expr] = []
    pending: list[tuple[int, int, int] | Operator] = [(0, len(tokens), level)]

    while pending:
        item = pending.pop()

        if isinstance(item, Operator):
            right = built.pop()
            left = built.pop()
            built.append(BinaryExpr(op=item, left=left, right=right))
            continue

        start, end, current = item
        if start == end:
            raise make_structural_error("Missing operand", StructuralProblem.EMPTY)

        first = tokens[start]
        if end - start == 1 and first.kind == TokenKind.NUMBER:
            built.append(Literal(value=cast(int, first.value)))
            continue

        split = _find_split(tokens, start, end, current, priorities)
        if split is None:
            raise make_structural_error(
                "Expression cannot be reduced: no operator found at any precedence level",
                StructuralProblem.IRREDUCIBLE,
                first.pos,
                source,
            )

        i, op, found_at = split
        following = priorities.next_level(found_at)
        pending.append(op)
        pending.append((i + 1, end, following))
        pending.append((start, i, following))

    return built[0]


def _find_split(
    tokens: list[Token],
    start: int,
    end: int,
    level: int,
    priorities: PriorityTable,
) -> tuple[int, Operator, int] | None:
    """Leftmost operator at ``level``, else at the following levels in cyclic order."""
    current = level
    for _ in priorities.levels():
        for i in range(start, end):
            tok = tokens[i]
            if not tok.is_operator:
                continue
            op = Operator.from_token(tok)
            if priorities.priority(op) != current:
                continue

            logger.debug(
                "Splitting on %r at position %d (level %d, %d tokens)",
                op.value,
                tok.pos,
                current,
                end - start,
            )
            return i, op, current

        current = priorities.next_level(current)

    return None
