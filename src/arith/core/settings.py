"""
Evaluator configuration for arith.

Settings come from three layers, later ones winning:

1. Built-in defaults: strict tokenizer, reference priority table, 64-bit
   integers.
2. An ``arith.toml`` file with an ``[evaluator]`` table::

       [evaluator]
       unknown_chars = "skip"        # or "error"
       priorities = "conventional"   # or "reference"
       int_bits = 32                 # 0 disables the overflow check

3. Environment variables ``ARITH_UNKNOWN_CHARS``, ``ARITH_PRIORITIES`` and
   ``ARITH_INT_BITS``.

Usage:
    from arith.core.settings import load_settings

    settings = load_settings(Path("arith.toml"))
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from arith.core.expression_lang.evaluator import DEFAULT_INT_BITS
from arith.core.expression_lang.tokenizer import UnknownCharPolicy
from arith.core.precedence import REFERENCE_PRIORITIES, PriorityTable, get_priority_table

logger = logging.getLogger(__name__)

# Default config file name, looked up in the working directory
CONFIG_FILENAME = "arith.toml"

UNKNOWN_CHARS_ENV_VAR = "ARITH_UNKNOWN_CHARS"
PRIORITIES_ENV_VAR = "ARITH_PRIORITIES"
INT_BITS_ENV_VAR = "ARITH_INT_BITS"


@dataclass(frozen=True)
class EvaluatorSettings:
    """How expressions are tokenized, built and evaluated."""

    unknown_chars: UnknownCharPolicy = UnknownCharPolicy.ERROR
    priorities: PriorityTable = field(default=REFERENCE_PRIORITIES)
    int_bits: int | None = DEFAULT_INT_BITS

    @property
    def max_literal(self) -> int | None:
        """Largest literal the tokenizer accepts, matching ``int_bits``."""
        if self.int_bits is None:
            return None
        return 2 ** (self.int_bits - 1) - 1


DEFAULT_SETTINGS = EvaluatorSettings()


def load_settings(path: Path | None = None, env: dict[str, str] | None = None) -> EvaluatorSettings:
    """Build settings from defaults, an optional TOML file, and the environment.

    Args:
        path: Config file. When ``None``, ``arith.toml`` in the working
            directory is used if it exists.
        env: Environment mapping, ``os.environ`` by default.

    Raises:
        FileNotFoundError: If ``path`` is given and does not exist.
    """
    settings = DEFAULT_SETTINGS

    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        if candidate.exists():
            path = candidate
    if path is not None:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        settings = _apply(settings, data.get("evaluator", {}), source=str(path))

    env = os.environ if env is None else env
    env_values: dict[str, Any] = {}
    if env.get(UNKNOWN_CHARS_ENV_VAR):
        env_values["unknown_chars"] = env[UNKNOWN_CHARS_ENV_VAR]
    if env.get(PRIORITIES_ENV_VAR):
        env_values["priorities"] = env[PRIORITIES_ENV_VAR]
    if env.get(INT_BITS_ENV_VAR):
        env_values["int_bits"] = env[INT_BITS_ENV_VAR]
    return _apply(settings, env_values, source="environment")


def _apply(settings: EvaluatorSettings, values: dict[str, Any], source: str) -> EvaluatorSettings:
    """Overlay raw config values; invalid ones are logged and ignored."""
    changes: dict[str, Any] = {}

    if "unknown_chars" in values:
        raw = str(values["unknown_chars"]).lower().strip()
        try:
            changes["unknown_chars"] = UnknownCharPolicy(raw)
        except ValueError:
            logger.warning(
                "Unknown unknown_chars value '%s' in %s. Keeping '%s'.",
                raw,
                source,
                settings.unknown_chars.value,
            )

    if "priorities" in values:
        try:
            changes["priorities"] = get_priority_table(str(values["priorities"]))
        except KeyError as e:
            logger.warning("%s in %s. Keeping '%s'.", e.args[0], source, settings.priorities.name)

    if "int_bits" in values:
        try:
            bits = int(values["int_bits"])
        except (TypeError, ValueError):
            logger.warning("Invalid int_bits value %r in %s. Ignoring.", values["int_bits"], source)
        else:
            if bits == 0:
                changes["int_bits"] = None
            elif bits >= 2:
                changes["int_bits"] = bits
            else:
                logger.warning("int_bits must be 0 or at least 2, got %d in %s.", bits, source)

    return replace(settings, **changes) if changes else settings
