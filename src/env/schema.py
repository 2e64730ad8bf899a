# NavProfile, SearchBudget, MovementCosts dataclasses
# src/env/schema.py

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class SearchBudget:
    """Hard limits on a single pathfinding call."""
    max_expansions: Optional[int]  # None disables the expansion cap
    max_seconds: Optional[float]   # wall-clock budget; None disables it


@dataclass
class MovementCosts:
    """Reference-agent time costs used by TIME_ELAPSED searches."""
    seconds_per_tile: Dict[str, float]          # keys: walk, jog, run
    diagonal_multiplier: float
    terrain_multipliers: Dict[str, float] = field(default_factory=dict)


@dataclass
class NavProfile:
    """Resolved navigation settings for one active profile."""
    name: str
    default_cost_mode: str          # "step_count" or "time_elapsed"
    budget: SearchBudget
    movement: MovementCosts
    impassable_terrain: tuple = ()  # terrain labels TileMap treats as walls
