"""Shared CLI helpers to reduce boilerplate across CLI command modules."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import replace
from pathlib import Path

import typer

from arith.core.errors import EvaluationError
from arith.core.expression_lang.tokenizer import UnknownCharPolicy
from arith.core.precedence import get_priority_table
from arith.core.settings import CONFIG_FILENAME, EvaluatorSettings, load_settings

LOG_LEVEL_ENV_VAR = "ARITH_LOG_LEVEL"


def configure_logging(verbose: bool) -> None:
    """Configure root logging from ``--verbose`` or ``ARITH_LOG_LEVEL``."""
    if verbose:
        level = logging.DEBUG
    else:
        name = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").upper().strip()
        # getLevelName maps known names to ints and anything else to a string
        found = logging.getLevelName(name)
        level = found if isinstance(found, int) else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def resolve_settings(
    config: Path | None,
    skip_unknown: bool,
    priorities: str | None,
) -> EvaluatorSettings:
    """Load settings and apply command-line overrides.

    Exits with code 1 if the config file is missing or unreadable, or the
    priority table name is unknown.
    """
    try:
        settings = load_settings(config)
    except FileNotFoundError:
        typer.echo(f"Config file not found: {config}", err=True)
        raise typer.Exit(code=1)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        shown = config if config is not None else Path.cwd() / CONFIG_FILENAME
        typer.echo(f"Error: invalid config {shown}: {e}", err=True)
        raise typer.Exit(code=1)

    if skip_unknown:
        settings = replace(settings, unknown_chars=UnknownCharPolicy.SKIP)
    if priorities:
        try:
            settings = replace(settings, priorities=get_priority_table(priorities))
        except KeyError as e:
            typer.echo(f"Error: {e.args[0]}", err=True)
            raise typer.Exit(code=1)
    return settings


def report_error(error: EvaluationError, source: str) -> None:
    """Print an evaluation error, with a caret under the position if known."""
    typer.echo(f"Error: {error}", err=True)
    context = error.context
    if context is not None and context.pos <= len(source):
        if context.source is None:
            context = replace(context, source=source)
        for line in context.format().splitlines():
            typer.echo(f"  {line}", err=True)
