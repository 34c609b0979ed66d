"""Core arith functionality: tree types, priority tables, settings, errors, entry points."""

from . import ir
from .calculator import RoundTrip, check_round_trip, evaluate, parse_expr, tokenize_with
from .errors import (
    ArithmeticEvalError,
    ErrorContext,
    EvaluationError,
    LexicalError,
    StructuralError,
    StructuralProblem,
)
from .precedence import (
    CONVENTIONAL_PRIORITIES,
    REFERENCE_PRIORITIES,
    PriorityTable,
    get_priority_table,
)
from .settings import DEFAULT_SETTINGS, EvaluatorSettings, load_settings

__all__ = [
    "ir",
    "ArithmeticEvalError",
    "ErrorContext",
    "EvaluationError",
    "LexicalError",
    "StructuralError",
    "StructuralProblem",
    "CONVENTIONAL_PRIORITIES",
    "REFERENCE_PRIORITIES",
    "PriorityTable",
    "get_priority_table",
    "DEFAULT_SETTINGS",
    "EvaluatorSettings",
    "load_settings",
    "RoundTrip",
    "check_round_trip",
    "evaluate",
    "parse_expr",
    "tokenize_with",
]
