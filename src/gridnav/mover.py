# convert routes into movement actions
# src/gridnav/mover.py
"""
Mover: turn PathfindingResults into queued MoveActions.

Owns:
- route -> sequence of MoveActions
- per-step cost accounting of a route against the oracles
- trimming a route to what fits in a time budget

It does NOT execute moves or touch world state; that's the simulation's job.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .grid import CostFn, OracleGrid, PassabilityFn
from .pathfinder import PathfindingResult, step_cost
from .types import Cell, CostMode, MoveAction, MovementMode


def path_to_actions(
    path_result: PathfindingResult,
    actor_id: Any,
    *,
    mode: MovementMode = MovementMode.JOG,
) -> List[MoveAction]:
    """
    Convert a PathfindingResult into one MoveAction per route cell.

    Failed results and empty routes give no actions.
    """
    if not path_result.success or not path_result.path:
        return []

    mode = MovementMode(mode)
    return [
        MoveAction(actor_id=actor_id, destination=(int(x), int(y)), mode=mode)
        for (x, y) in path_result.path
    ]


def route_step_costs(
    passability: PassabilityFn,
    start: Cell,
    route: List[Cell],
    *,
    agent_id: Any = None,
    cost_oracle: Optional[CostFn] = None,
    movement_mode: MovementMode = MovementMode.JOG,
    cost_mode: CostMode = CostMode.STEP_COUNT,
    view: Any = None,
) -> List[float]:
    """
    Recompute the cost of each step of `route`, starting from `start`.

    Terrain for each step is re-queried from the passability oracle, so the
    sum of the returned list matches the cost the pathfinder reported as
    long as the oracles haven't changed in between.
    """
    if not route:
        return []

    grid = OracleGrid(passability=passability, agent_id=agent_id, destination=route[-1], view=view)
    costs: List[float] = []
    previous = start

    for cell in route:
        offset = (cell[0] - previous[0], cell[1] - previous[1])
        if max(abs(offset[0]), abs(offset[1])) != 1:
            raise ValueError(f"Route is not contiguous between {previous} and {cell}")

        _, terrain = grid.query(cell)
        costs.append(
            step_cost(
                offset,
                terrain,
                cost_mode=CostMode(cost_mode),
                movement_mode=MovementMode(movement_mode),
                cost_oracle=cost_oracle,
            )
        )
        previous = cell

    return costs


def route_cost(passability: PassabilityFn, start: Cell, route: List[Cell], **kwargs: Any) -> float:
    """Total of route_step_costs."""
    return sum(route_step_costs(passability, start, route, **kwargs))


def truncate_route(
    passability: PassabilityFn,
    start: Cell,
    route: List[Cell],
    max_seconds: float,
    *,
    cost_oracle: CostFn,
    agent_id: Any = None,
    movement_mode: MovementMode = MovementMode.JOG,
    view: Any = None,
) -> List[Cell]:
    """
    Keep the longest prefix of `route` that the agent can walk in `max_seconds`.

    The search itself may rank routes with a reference agent's stats; this
    is where the actual agent's cost oracle decides how far it gets.
    """
    if max_seconds < 0:
        raise ValueError(f"max_seconds must be >= 0, got {max_seconds!r}")

    costs = route_step_costs(
        passability,
        start,
        route,
        agent_id=agent_id,
        cost_oracle=cost_oracle,
        movement_mode=movement_mode,
        cost_mode=CostMode.TIME_ELAPSED,
        view=view,
    )

    spent = 0.0
    kept = 0
    for seconds in costs:
        if spent + seconds > max_seconds:
            break
        spent += seconds
        kept += 1

    return list(route[:kept])
