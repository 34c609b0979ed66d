"""
Expression commands for the arith CLI.

Commands:
- eval: Print the integer value of an expression
- tokens: Show the token stream
- tree: Show the expression tree
- check: Render the tree, read it back, and compare results
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from arith.cli.common import report_error, resolve_settings
from arith.core.calculator import check_round_trip, evaluate, parse_expr, tokenize_with
from arith.core.errors import EvaluationError
from arith.core.ir import BinaryExpr, Expr, tree_depth

console = Console()

ExpressionArg = Annotated[str, typer.Argument(help="Expression, e.g. '1 + 2 * 3'")]
ConfigOpt = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to arith.toml (default: ./arith.toml if present)"),
]
SkipUnknownOpt = Annotated[
    bool,
    typer.Option("--skip-unknown", help="Drop unrecognized characters instead of failing"),
]
PrioritiesOpt = Annotated[
    str | None,
    typer.Option("--priorities", "-p", help="Priority table: reference or conventional"),
]


def eval_command(
    expression: ExpressionArg,
    config: ConfigOpt = None,
    skip_unknown: SkipUnknownOpt = False,
    priorities: PrioritiesOpt = None,
) -> None:
    """Evaluate an expression and print the integer result."""
    settings = resolve_settings(config, skip_unknown, priorities)
    try:
        result = evaluate(expression, settings)
    except EvaluationError as e:
        report_error(e, expression)
        raise typer.Exit(code=1)
    typer.echo(str(result))


def tokens_command(
    expression: ExpressionArg,
    config: ConfigOpt = None,
    skip_unknown: SkipUnknownOpt = False,
) -> None:
    """Show the tokens an expression is split into."""
    settings = resolve_settings(config, skip_unknown, None)
    try:
        tokens = tokenize_with(expression, settings)
    except EvaluationError as e:
        report_error(e, expression)
        raise typer.Exit(code=1)

    table = Table(title=f"{len(tokens)} tokens")
    table.add_column("Pos", justify="right")
    table.add_column("Kind")
    table.add_column("Value", justify="right")
    for tok in tokens:
        table.add_row(str(tok.pos), tok.kind.value, "" if tok.value is None else str(tok.value))
    console.print(table)


def tree_command(
    expression: ExpressionArg,
    config: ConfigOpt = None,
    skip_unknown: SkipUnknownOpt = False,
    priorities: PrioritiesOpt = None,
) -> None:
    """Show the expression tree built for an expression."""
    settings = resolve_settings(config, skip_unknown, priorities)
    try:
        expr = parse_expr(expression, settings)
    except EvaluationError as e:
        report_error(e, expression)
        raise typer.Exit(code=1)

    root = Tree(_label(expr))
    _add_children(root, expr)
    console.print(root)
    typer.echo(f"Rendered: {expr}")
    typer.echo(f"Depth: {tree_depth(expr)}  Priorities: {settings.priorities.name}")


def check_command(
    expression: ExpressionArg,
    config: ConfigOpt = None,
    skip_unknown: SkipUnknownOpt = False,
    priorities: PrioritiesOpt = None,
) -> None:
    """Render the tree, read it back, and verify both evaluate the same."""
    settings = resolve_settings(config, skip_unknown, priorities)
    try:
        outcome = check_round_trip(expression, settings)
    except EvaluationError as e:
        report_error(e, expression)
        raise typer.Exit(code=1)

    typer.echo(f"Rendered: {outcome.rendered}")
    typer.echo(f"Original: {outcome.original}")
    typer.echo(f"Re-read:  {outcome.reread}")
    if not outcome.ok:
        typer.echo("Round trip mismatch", err=True)
        raise typer.Exit(code=1)
    typer.echo("OK")


def _label(expr: Expr) -> str:
    if isinstance(expr, BinaryExpr):
        return expr.op.value
    return str(expr.value)


def _add_children(root: Tree, expr: Expr) -> None:
    pending: list[tuple[Tree, Expr]] = [(root, expr)]
    while pending:
        node, current = pending.pop()
        if not isinstance(current, BinaryExpr):
            continue
        for child in (current.left, current.right):
            pending.append((node.add(_label(child)), child))
