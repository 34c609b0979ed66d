"""
Expression tree types for arith.

A tree is either an integer ``Literal`` leaf or a ``BinaryExpr`` that owns
exactly two subtrees. Nodes are frozen pydantic models; ``str()`` renders
the fully parenthesized form, e.g. ``(1 + (2 * 3))``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from arith.core.errors import StructuralProblem, make_structural_error

if TYPE_CHECKING:
    from arith.core.expression_lang.tokenizer import Token

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class Operator(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def from_token(cls, token: Token) -> Operator:
        """Convert an operator token; any other token is a structural error."""
        op = _KIND_TO_OP.get(token.kind.value)
        if op is not None:
            return op
        raise make_structural_error(
            f"Expected an operator, got {token.kind}",
            StructuralProblem.NOT_AN_OPERATOR,
            token.pos,
        )


# Keyed by TokenKind value so this module does not import the tokenizer
_KIND_TO_OP: dict[str, Operator] = {
    "plus": Operator.ADD,
    "minus": Operator.SUB,
    "star": Operator.MUL,
    "slash": Operator.DIV,
}

# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A non-negative integer literal."""

    value: int = Field(ge=0, description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: Operator
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return to_text(self)


Expr = Literal | BinaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()


def to_text(expr: Expr) -> str:
    """Fully parenthesized text of a tree, e.g. ``(1 + (2 * 3))``.

    Walks with an explicit stack; right-deep trees can be as deep as the
    input is long.
    """
    parts: list[str] = []
    pending: list[Expr | str] = [expr]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Literal):
            parts.append(str(item.value))
        else:
            pending.extend([")", item.right, f" {item.op.value} ", item.left, "("])
    return "".join(parts)


def tree_depth(expr: Expr) -> int:
    """Number of nodes on the longest root-to-leaf path."""
    deepest = 0
    pending: list[tuple[Expr, int]] = [(expr, 1)]
    while pending:
        node, depth = pending.pop()
        deepest = max(deepest, depth)
        if isinstance(node, BinaryExpr):
            pending.append((node.left, depth + 1))
            pending.append((node.right, depth + 1))
    return deepest
