"""
Tokenizer for arith expressions.

Converts an expression string into a sequence of typed tokens in one
forward pass.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum, auto

from arith.core.errors import make_lexical_error

logger = logging.getLogger(__name__)

# Largest literal a signed 64-bit integer can hold
INT64_MAX = 2**63 - 1


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Grouping, only produced when reading the parenthesized rendering
    LPAREN = auto()
    RPAREN = auto()


class UnknownCharPolicy(StrEnum):
    """What the tokenizer does with a character it does not recognize."""

    ERROR = "error"
    SKIP = "skip"


class Token:
    """A single token from the expression tokenizer.

    Tokens are immutable once created; equality and hashing use ``kind``
    and ``value``. Only NUMBER tokens carry a value.
    """

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: int | None, pos: int) -> None:
        if (kind == TokenKind.NUMBER) != isinstance(value, int):
            raise ValueError(f"{kind} token cannot carry value {value!r}")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "pos", pos)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Token is immutable; cannot delete {name!r}")

    @property
    def is_operator(self) -> bool:
        return self.kind in _OPERATOR_KINDS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return f"Token({self.kind}, {self.value}, pos={self.pos})"
        return f"Token({self.kind}, pos={self.pos})"


_OPERATOR_KINDS = frozenset({TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH})

_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
}

_GROUPING: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

# ASCII digits only; str.isdigit() also accepts superscripts and other scripts
_NUMBER_RE = re.compile(r"[0-9]+")


def tokenize(
    source: str,
    *,
    policy: UnknownCharPolicy = UnknownCharPolicy.ERROR,
    max_value: int | None = INT64_MAX,
    grouping: bool = False,
) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Args:
        source: Expression text, e.g. ``"1230 + 24"``.
        policy: Raise on unrecognized characters, or drop them.
        max_value: Largest accepted literal; ``None`` disables the check.
        grouping: Also emit ``(`` and ``)`` tokens.

    Returns:
        Tokens in source order.

    Raises:
        LexicalError: On an unrecognized character (``ERROR`` policy) or a
            literal above ``max_value``.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        # Skip whitespace
        if c in " \t\n\r":
            i += 1
            continue

        # Numbers: maximal run of digits
        m = _NUMBER_RE.match(source, i)
        if m is not None:
            value = int(m.group(0))
            if max_value is not None and value > max_value:
                raise make_lexical_error(
                    f"Integer literal {m.group(0)} exceeds maximum {max_value}", i, source
                )
            tokens.append(Token(TokenKind.NUMBER, value, i))
            i = m.end()
            continue

        if c in _SINGLE_CHAR:
            tokens.append(Token(_SINGLE_CHAR[c], None, i))
            i += 1
            continue

        if grouping and c in _GROUPING:
            tokens.append(Token(_GROUPING[c], None, i))
            i += 1
            continue

        if policy == UnknownCharPolicy.SKIP:
            logger.debug("Skipping unrecognized character %r at position %d", c, i)
            i += 1
            continue

        raise make_lexical_error(f"Unrecognized character {c!r}", i, source)

    return tokens
