"""
Operator priority tables.

The tree builder splits on the lowest-priority operator first, so a lower
number binds more loosely. The reference table ranks every operator on its
own level (``+`` 1, ``-`` 2, ``*`` 3, ``/`` 4). That ordering places
subtraction above addition and division above multiplication, which is not
conventional arithmetic; it is kept as the default so results match the
reference behaviour, and ``CONVENTIONAL_PRIORITIES`` is available when the
usual two-level ordering is wanted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from arith.core.ir import Operator


@dataclass(frozen=True)
class PriorityTable:
    """Priority of each operator, plus the ladder of distinct levels."""

    name: str
    priorities: Mapping[Operator, int]
    _levels: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        missing = [op.value for op in Operator if op not in self.priorities]
        if missing:
            raise ValueError(f"Priority table '{self.name}' has no entry for {missing}")
        for op, prio in self.priorities.items():
            if prio < 1:
                raise ValueError(f"Priority for '{op.value}' must be positive, got {prio}")
        object.__setattr__(self, "priorities", MappingProxyType(dict(self.priorities)))
        object.__setattr__(self, "_levels", tuple(sorted(set(self.priorities.values()))))

    def priority(self, op: Operator) -> int:
        return self.priorities[op]

    def levels(self) -> tuple[int, ...]:
        """Distinct priorities, lowest first."""
        return self._levels

    def lowest(self) -> int:
        return self._levels[0]

    def next_level(self, level: int) -> int:
        """The level after ``level``, wrapping from the highest back to the lowest."""
        idx = self._levels.index(level)
        return self._levels[(idx + 1) % len(self._levels)]


REFERENCE_PRIORITIES = PriorityTable(
    name="reference",
    priorities={
        Operator.ADD: 1,
        Operator.SUB: 2,
        Operator.MUL: 3,
        Operator.DIV: 4,
    },
)

CONVENTIONAL_PRIORITIES = PriorityTable(
    name="conventional",
    priorities={
        Operator.ADD: 1,
        Operator.SUB: 1,
        Operator.MUL: 2,
        Operator.DIV: 2,
    },
)

PRIORITY_TABLES: dict[str, PriorityTable] = {
    REFERENCE_PRIORITIES.name: REFERENCE_PRIORITIES,
    CONVENTIONAL_PRIORITIES.name: CONVENTIONAL_PRIORITIES,
}


def get_priority_table(name: str) -> PriorityTable:
    """Look up a preset table by name.

    Raises:
        KeyError: If no preset has that name.
    """
    try:
        return PRIORITY_TABLES[name.lower().strip()]
    except KeyError:
        available = ", ".join(sorted(PRIORITY_TABLES))
        raise KeyError(f"Unknown priority table '{name}'. Available: {available}") from None
