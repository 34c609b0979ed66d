"""
arith - integer arithmetic expression evaluator.

Tokenizes a flat ``+ - * /`` expression, builds a binary tree by
precedence partitioning, and reduces it to a single integer.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core import ir
from .core.calculator import evaluate, parse_expr
from .core.errors import ArithmeticEvalError, EvaluationError, LexicalError, StructuralError
from .core.settings import EvaluatorSettings, load_settings


def _get_version() -> str:
    """Get version from installed package metadata."""
    try:
        return _metadata_version("arith")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "evaluate",
    "parse_expr",
    "EvaluationError",
    "LexicalError",
    "StructuralError",
    "ArithmeticEvalError",
    "EvaluatorSettings",
    "load_settings",
]
