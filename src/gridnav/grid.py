# navigation grid abstraction over passability / cost oracles
# src/gridnav/grid.py
"""
OracleGrid: 8-connected grid view over a passability oracle.

This module does not own any grid data. It only:
- Validates caller-supplied cells.
- Exposes passability queries through a pluggable oracle callback.
- Enumerates legal neighbor moves, including the corner-cutting rule.

What is actually blocked (walls, occupants, terrain) belongs to whatever
world/simulation layer supplies the oracle.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .types import Cell, Direction, MovementMode

# Signature for a passability oracle:
#   passability(cell, view, agent_id, destination) -> (passable, terrain)
# The oracle may treat `destination` as passable even when it is occupied.
PassabilityFn = Callable[[Cell, Any, Any, Cell], Tuple[bool, Any]]

# Signature for a time-cost oracle:
#   cost(movement_mode, terrain, direction) -> seconds >= 0
CostFn = Callable[[MovementMode, Any, Direction], float]

# Cardinal offsets first, then diagonals.
CARDINAL_OFFSETS: Tuple[Direction, ...] = (
    (0, -1),  # up
    (0, 1),   # down
    (-1, 0),  # left
    (1, 0),   # right
)
DIAGONAL_OFFSETS: Tuple[Direction, ...] = (
    (-1, -1),  # up-left
    (1, -1),   # up-right
    (-1, 1),   # down-left
    (1, 1),    # down-right
)
NEIGHBOR_OFFSETS: Tuple[Direction, ...] = CARDINAL_OFFSETS + DIAGONAL_OFFSETS


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


@dataclass
class NavigationError(ValueError):
    """
    Domain-level error for input the pathfinder refuses to search with.

    Examples:
        - malformed start / end cells
        - TIME_ELAPSED requested without a cost oracle
        - a cost oracle returning a negative or NaN step cost

    "No path" is NOT an error; it is a normal PathfindingResult.
    """

    code: str
    details: Dict[str, Any]

    def __str__(self) -> str:
        return f"NavigationError(code={self.code!r}, details={self.details!r})"


class InvalidCellError(NavigationError):
    """Raised when a value cannot be used as an integer grid cell."""


def _coerce_coord(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("bool is not a coordinate")
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real):
        f = float(value)
        if not math.isfinite(f) or not f.is_integer():
            raise ValueError(f"non-integral coordinate {value!r}")
        return int(f)
    raise TypeError(f"unsupported coordinate type {type(value).__name__}")


def validate_cell(value: Any, *, name: str = "cell") -> Cell:
    """
    Normalize `value` into an exact (x, y) integer cell.

    Accepts any 2-item sequence of integers; finite floats with no
    fractional part (e.g. 3.0) are coerced. Everything else raises
    InvalidCellError before any search work happens.
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise InvalidCellError(
            code="invalid_cell",
            details={"name": name, "value": repr(value), "error": "not a sequence"},
        )
    if len(value) != 2:
        raise InvalidCellError(
            code="invalid_cell",
            details={"name": name, "value": repr(value), "error": "expected 2 coordinates"},
        )
    try:
        return (_coerce_coord(value[0]), _coerce_coord(value[1]))
    except (TypeError, ValueError) as exc:
        raise InvalidCellError(
            code="invalid_cell",
            details={"name": name, "value": repr(value), "error": str(exc)},
        ) from exc


def is_diagonal(offset: Direction) -> bool:
    return offset[0] != 0 and offset[1] != 0


# ---------------------------------------------------------------------------
# Grid view
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Neighbor:
    """A legal move out of a cell, with the terrain reported by the oracle."""

    cell: Cell
    offset: Direction
    terrain: Any

    @property
    def diagonal(self) -> bool:
        return is_diagonal(self.offset)


@dataclass
class OracleGrid:
    """
    Navigation grid bound to one search: oracle + view + agent + destination.

    Responsibilities:
    - Provide passability tests (query / is_passable).
    - Provide legal 8-directional neighbor moves for pathfinding.

    It does NOT:
    - Store obstacles or terrain.
    - Compute step costs.
    """

    passability: PassabilityFn
    agent_id: Any
    destination: Cell
    view: Any = None

    # ------------------------------------------------------------------
    # Core queries
    # ------------------------------------------------------------------

    def query(self, cell: Cell) -> Tuple[bool, Any]:
        """
        Ask the oracle about `cell`.

        This is the only place a passability decision is made; oracle
        exceptions propagate to the caller untouched.
        """
        passable, terrain = self.passability(cell, self.view, self.agent_id, self.destination)
        return bool(passable), terrain

    def is_passable(self, cell: Cell) -> bool:
        return self.query(cell)[0]

    def neighbors_8dir(self, cell: Cell) -> List[Neighbor]:
        """
        Return legal moves out of `cell` on the 8-connected grid.

        A diagonal move is rejected unless both orthogonal cells it would
        slip between are passable, even when the diagonal cell itself is.
        """
        x, y = cell
        moves: List[Neighbor] = []

        for dx, dy in NEIGHBOR_OFFSETS:
            target = (x + dx, y + dy)
            passable, terrain = self.query(target)
            if not passable:
                continue

            if dx != 0 and dy != 0:
                if not self.is_passable((x + dx, y)) or not self.is_passable((x, y + dy)):
                    continue

            moves.append(Neighbor(cell=target, offset=(dx, dy), terrain=terrain))

        return moves

    def terrain_at(self, cell: Cell) -> Optional[Any]:
        """Terrain reported for `cell`, or None when the oracle says blocked."""
        passable, terrain = self.query(cell)
        return terrain if passable else None
