"""
Expression evaluator for arith.

Reduces an expression tree to a single integer. Pure evaluation: no I/O,
no side effects, and no use of Python's eval(). Only the closed set of
tree node types is handled.
"""

from __future__ import annotations

from arith.core.errors import ArithmeticEvalError
from arith.core.ir import BinaryExpr, Expr, Literal, Operator

DEFAULT_INT_BITS = 64


def eval_tree(expr: Expr, *, int_bits: int | None = DEFAULT_INT_BITS) -> int:
    """Evaluate an expression tree.

    Args:
        expr: Root of the tree.
        int_bits: Width of the signed integer every intermediate result must
            fit in; ``None`` allows arbitrary size.

    Returns:
        The computed value.

    Raises:
        ArithmeticEvalError: On division by zero or integer overflow.
    """
    if int_bits is None:
        bounds = None
    else:
        bounds = (-(2 ** (int_bits - 1)), 2 ** (int_bits - 1) - 1)
    return _interpret(expr, bounds)


def _interpret(expr: Expr, bounds: tuple[int, int] | None) -> int:
    """Post-order walk with an explicit stack.

    Same-level chains build right-deep trees as long as the input, so the
    walk must not use one Python frame per level.
    """
    pending: list[tuple[Expr, bool]] = [(expr, False)]
    values: list[int] = []

    while pending:
        node, operands_ready = pending.pop()

        if isinstance(node, Literal):
            values.append(node.value)
            continue

        if not isinstance(node, BinaryExpr):
            raise ArithmeticEvalError(f"Unknown expression type: {type(node).__name__}")

        if not operands_ready:
            pending.append((node, True))
            pending.append((node.right, False))
            pending.append((node.left, False))
            continue

        right = values.pop()
        left = values.pop()
        values.append(_apply(node.op, left, right, bounds))

    return values[0]


def _apply(op: Operator, left: int, right: int, bounds: tuple[int, int] | None) -> int:
    """Combine two operand values."""
    if op == Operator.ADD:
        result = left + right
    elif op == Operator.SUB:
        result = left - right
    elif op == Operator.MUL:
        result = left * right
    elif op == Operator.DIV:
        if right == 0:
            raise ArithmeticEvalError(f"Division by zero: {left} / 0")
        result = truncating_div(left, right)
    else:
        raise ArithmeticEvalError(f"Unknown binary op: {op}")

    if bounds is not None and not bounds[0] <= result <= bounds[1]:
        raise ArithmeticEvalError(
            f"Integer overflow: {left} {op.value} {right} = {result} does not fit"
        )
    return result


def truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero (``-7 / 2 == -3``).

    Python's ``//`` floors instead, so the quotient is computed on
    magnitudes and the sign applied afterwards.
    """
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        return -quotient
    return quotient
