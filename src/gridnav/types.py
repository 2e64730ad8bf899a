# core shared types: Cell, Direction, MovementMode, CostMode, MoveAction
# src/gridnav/types.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


# (x, y) integer grid coordinates
Cell = Tuple[int, int]

# (dx, dy) step offset, each component in {-1, 0, 1}
Direction = Tuple[int, int]


class MovementMode(str, Enum):
    """How fast the agent moves; feeds the time-cost oracle."""

    WALK = "walk"
    JOG = "jog"
    RUN = "run"


class CostMode(str, Enum):
    """
    What the pathfinder minimises.

      - STEP_COUNT:   fewest grid steps (1 per cardinal, sqrt(2) per diagonal)
      - TIME_ELAPSED: least simulated seconds, as reported by a cost oracle
    """

    STEP_COUNT = "step_count"
    TIME_ELAPSED = "time_elapsed"


@dataclass(frozen=True)
class MoveAction:
    """
    A single queued step of an agent towards `destination`.

    Produced by gridnav.mover.path_to_actions; executing it is the
    simulation layer's job.
    """

    actor_id: Any
    destination: Cell
    mode: MovementMode
