"""
Error types for arith tokenizing, tree building, and evaluation.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional


class EvaluationError(Exception):
    """Base exception for all arith errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    @property
    def pos(self) -> int | None:
        """Source offset of the error, if known."""
        return self.context.pos if self.context else None

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message} (at position {self.context.pos})"
        return self.message


class LexicalError(EvaluationError):
    """
    Raised when the source text cannot be tokenized.

    Examples:
    - Unrecognized character (strict policy)
    - Integer literal larger than the configured maximum
    """

    pass


class StructuralProblem(StrEnum):
    """Why a token sequence could not be turned into a tree."""

    EMPTY = "empty"
    LEADING_OPERATOR = "leading_operator"
    TRAILING_OPERATOR = "trailing_operator"
    ADJACENT_OPERATORS = "adjacent_operators"
    ADJACENT_LITERALS = "adjacent_literals"
    IRREDUCIBLE = "irreducible"
    NOT_AN_OPERATOR = "not_an_operator"
    MALFORMED_RENDERING = "malformed_rendering"
    TOO_DEEP = "too_deep"


class StructuralError(EvaluationError):
    """
    Raised when a token sequence is not a valid literal/operator alternation.

    Examples:
    - Empty expression
    - Operator at the start or end
    - Two operators or two literals next to each other
    - No precedence level yields a split
    - Rendered text nested deeper than the reader can follow
    """

    def __init__(
        self,
        message: str,
        problem: StructuralProblem,
        context: Optional["ErrorContext"] = None,
    ):
        self.problem = problem
        super().__init__(message, context)


class ArithmeticEvalError(EvaluationError, ArithmeticError):
    """
    Raised when a well-formed tree cannot be reduced to an integer.

    Examples:
    - Division by zero
    - Intermediate result outside the configured integer width
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside the expression text.

    Attributes:
        pos: Offset into the source (0-indexed)
        source: Optional full expression text, used for the caret snippet
    """

    pos: int
    source: str | None = None

    def format(self) -> str:
        """
        Format the source with a caret under the offending character.

        Returns:
            Two lines, the source and the marker, or just the position
            when no source is attached.
        """
        if self.source is None:
            return f"position {self.pos}"
        return f"{self.source}\n{' ' * self.pos}^"


def make_lexical_error(message: str, pos: int, source: str | None = None) -> LexicalError:
    """
    Helper to create a LexicalError with context.

    Args:
        message: Error description
        pos: Offset of the offending character
        source: Optional full source text

    Returns:
        LexicalError with context attached
    """
    return LexicalError(message, ErrorContext(pos=pos, source=source))


def make_structural_error(
    message: str,
    problem: StructuralProblem,
    pos: int | None = None,
    source: str | None = None,
) -> StructuralError:
    """
    Helper to create a StructuralError with optional context.

    Args:
        message: Error description
        problem: Reason code
        pos: Optional offset of the offending token
        source: Optional full source text

    Returns:
        StructuralError with context if a position is provided
    """
    if pos is not None:
        return StructuralError(message, problem, ErrorContext(pos=pos, source=source))
    return StructuralError(message, problem)
