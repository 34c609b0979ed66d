"""
Fully parenthesized rendering of expression trees, and a reader for it.

The rendered form wraps every binary node in parentheses:

    rendered → NUMBER | "(" rendered op rendered ")"
    op       → "+" | "-" | "*" | "/"

It exists so a built tree can be written out and read back as a
self-consistency check. The expression language itself has no grouping;
only ``read_rendered`` accepts parentheses.
"""

from __future__ import annotations

from typing import cast

from arith.core.errors import StructuralError, StructuralProblem, make_structural_error
from arith.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from arith.core.ir import BinaryExpr, Expr, Literal, Operator


def render(expr: Expr) -> str:
    """Render a tree as fully parenthesized text, e.g. ``(1 + (2 * 3))``."""
    return str(expr)


class _Reader:
    """Recursive descent reader for the rendered form."""

    def __init__(self, tokens: list[Token], source: str) -> None:
        self.tokens = tokens
        self.source = source
        self.pos = 0

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        tok = self.current
        if tok is None:
            raise self._error("Unexpected end of rendered expression", len(self.source))
        self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.advance()
        if tok.kind != kind:
            raise self._error(f"Expected {kind}, got {tok.kind}", tok.pos)
        return tok

    def read_expr(self) -> Expr:
        """NUMBER | '(' expr op expr ')'"""
        tok = self.advance()

        if tok.kind == TokenKind.NUMBER:
            return Literal(value=cast(int, tok.value))

        if tok.kind != TokenKind.LPAREN:
            raise self._error(f"Unexpected token: {tok.kind}", tok.pos)

        left = self.read_expr()
        op_tok = self.advance()
        if not op_tok.is_operator:
            raise self._error(f"Expected an operator, got {op_tok.kind}", op_tok.pos)
        right = self.read_expr()
        self.expect(TokenKind.RPAREN)
        return BinaryExpr(op=Operator.from_token(op_tok), left=left, right=right)

    def _error(self, message: str, pos: int) -> StructuralError:
        return make_structural_error(
            message, StructuralProblem.MALFORMED_RENDERING, pos, self.source
        )


def read_rendered(text: str) -> Expr:
    """Read the output of ``render()`` back into a tree.

    Raises:
        LexicalError: On characters outside digits, operators and parentheses.
        StructuralError: If the text is not a fully parenthesized rendering, or
            nests deeper than the interpreter recursion limit allows.
    """
    tokens = tokenize(text, max_value=None, grouping=True)
    reader = _Reader(tokens, text)
    try:
        expr = reader.read_expr()
    except RecursionError:
        raise make_structural_error(
            "Rendered expression is nested too deeply to read",
            StructuralProblem.TOO_DEEP,
        ) from None

    # Ensure all tokens consumed
    leftover = reader.current
    if leftover is not None:
        raise reader._error(f"Unexpected token after expression: {leftover.kind}", leftover.pos)

    return expr
