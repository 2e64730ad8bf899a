# src/gridnav/terrain.py
"""
Reference oracles for gridnav.

This is a minimal in-memory layer that answers the two questions the
pathfinder asks:

    - TileMap.passability(cell, view, agent_id, destination)
        "Can this agent enter this cell, and what terrain is there?"
    - TerrainCostProfile(movement_mode, terrain, direction)
        "How many seconds does this step take?"

Real simulations are expected to supply their own oracles with the same
signatures; these exist for tools, tests and simple callers. This module
does NOT:
    - Generate or persist terrain
    - Track agents over time
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Iterable, Optional, Set, Tuple

from .grid import is_diagonal
from .types import Cell, Direction, MovementMode

if TYPE_CHECKING:
    from env.schema import MovementCosts


DEFAULT_TERRAIN = "flatlands"


@dataclass
class TileMap:
    """
    Sparse, unbounded tile map usable as a PassabilityFn.

    Parameters:
        blocked:
            Cells that are never passable (walls, cliffs).

        terrain:
            Per-cell terrain labels; cells not listed report default_terrain.

        impassable_terrain:
            Terrain labels that block movement (e.g. deep water).

        occupants:
            cell -> agent id standing there. An occupied cell blocks other
            agents unless it is the query's destination, so agents can
            target each other.

    The `view` argument of the oracle is accepted and ignored; a caller
    keeping several map views keeps one TileMap per view.
    """

    blocked: Set[Cell] = field(default_factory=set)
    terrain: Dict[Cell, str] = field(default_factory=dict)
    default_terrain: str = DEFAULT_TERRAIN
    impassable_terrain: FrozenSet[str] = frozenset()
    occupants: Dict[Cell, Any] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Oracle entry point
    # ------------------------------------------------------------------

    def passability(
        self,
        cell: Cell,
        view: Any,
        agent_id: Any,
        destination: Cell,
    ) -> Tuple[bool, str]:
        """
        Decide whether `agent_id` may enter `cell`.

        Behavior:
            - blocked cells and impassable terrain: never passable
            - cells occupied by another agent: passable only if `cell`
              is the destination
            - everything else: passable
        """
        kind = self.terrain.get(cell, self.default_terrain)

        if cell in self.blocked or kind in self.impassable_terrain:
            return False, kind

        occupant = self.occupants.get(cell)
        if occupant is not None and occupant != agent_id and cell != destination:
            return False, kind

        return True, kind

    # ------------------------------------------------------------------
    # Mutation helpers
    # ------------------------------------------------------------------

    def place(self, agent_id: Any, cell: Cell) -> None:
        """Move `agent_id` onto `cell`, clearing its previous spot."""
        for occupied, who in list(self.occupants.items()):
            if who == agent_id:
                del self.occupants[occupied]
        self.occupants[cell] = agent_id


# Reference stats: seconds to cross one flat tile for each movement mode.
DEFAULT_SECONDS_PER_TILE: Dict[MovementMode, float] = {
    MovementMode.WALK: 12.0,
    MovementMode.JOG: 8.0,
    MovementMode.RUN: 5.0,
}


@dataclass
class TerrainCostProfile:
    """
    Time-cost policy for a single reference agent, usable as a CostFn.

    seconds = seconds_per_tile[mode] * terrain_multiplier * (diagonal_multiplier if diagonal)

    Terrain labels missing from terrain_multipliers cost 1.0x.
    """

    seconds_per_tile: Dict[MovementMode, float] = field(
        default_factory=lambda: dict(DEFAULT_SECONDS_PER_TILE)
    )
    terrain_multipliers: Dict[str, float] = field(default_factory=dict)
    diagonal_multiplier: float = math.sqrt(2.0)

    def __call__(self, movement_mode: MovementMode, terrain: Any, direction: Direction) -> float:
        return self.seconds(movement_mode, terrain, direction)

    def seconds(self, movement_mode: MovementMode, terrain: Any, direction: Direction) -> float:
        mode = MovementMode(movement_mode)
        try:
            base = self.seconds_per_tile[mode]
        except KeyError as exc:
            raise KeyError(f"No seconds_per_tile configured for movement mode {mode.value!r}") from exc

        seconds = base * self.terrain_multipliers.get(terrain, 1.0)
        if is_diagonal(direction):
            seconds *= self.diagonal_multiplier
        return seconds

    @classmethod
    def from_movement_costs(cls, costs: "MovementCosts") -> "TerrainCostProfile":
        """Build from the `movement` section of a NavProfile."""
        return cls(
            seconds_per_tile={MovementMode(k): float(v) for k, v in costs.seconds_per_tile.items()},
            terrain_multipliers={str(k): float(v) for k, v in costs.terrain_multipliers.items()},
            diagonal_multiplier=float(costs.diagonal_multiplier),
        )


def tile_map_from_rows(
    rows: Iterable[str],
    *,
    legend: Optional[Dict[str, str]] = None,
    wall: str = "#",
) -> Tuple[TileMap, Dict[str, Cell]]:
    """
    Parse an ASCII map into a TileMap.

    Row index is y, column index is x. `wall` characters are blocked;
    characters in `legend` set that cell's terrain; any other character is
    recorded as a marker (e.g. "S", "G") on default terrain. Returns the map
    and a dict of marker -> cell (last occurrence wins).
    """
    legend = legend or {}
    tiles = TileMap()
    markers: Dict[str, Cell] = {}

    for y, row in enumerate(rows):
        for x, ch in enumerate(row.rstrip("\n")):
            cell = (x, y)
            if ch == wall:
                tiles.blocked.add(cell)
            elif ch in legend:
                tiles.terrain[cell] = legend[ch]
            elif ch not in (".", " "):
                markers[ch] = cell

    return tiles, markers
