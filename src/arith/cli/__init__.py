"""
arith CLI package.

- expression.py: eval, tokens, tree and check commands
- common.py: settings resolution, logging setup, error reporting
"""

from __future__ import annotations

import platform
import sys

import typer

from arith.cli.common import configure_logging
from arith.cli.expression import check_command, eval_command, tokens_command, tree_command


def get_version() -> str:
    """Get arith version from package metadata."""
    from arith import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"arith {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


app = typer.Typer(
    help="arith - evaluate integer arithmetic expressions over + - * /",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """arith CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="eval")(eval_command)
app.command(name="tokens")(tokens_command)
app.command(name="tree")(tree_command)
app.command(name="check")(check_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main", "get_version", "version_callback"]


if __name__ == "__main__":
    main(sys.argv[1:])
