# A* pathfinding over OracleGrid
# src/gridnav/pathfinder.py
"""
A* pathfinding over an 8-connected OracleGrid.

- Octile distance heuristic.
- 8-directional neighbors with corner-cutting prevention (see grid.py).
- STEP_COUNT or TIME_ELAPSED step costs.
- max_expansions / max_seconds guards, since the grid is unbounded and a
  disconnected query would otherwise expand forever.

No closed set is kept: a cell may be expanded again if a cheaper route to
it turns up, and stale heap entries are harmless because a relaxation only
happens on strict improvement of g_score.
"""

from __future__ import annotations

import heapq
import logging
import math
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from .grid import CostFn, NavigationError, OracleGrid, PassabilityFn, is_diagonal, validate_cell
from .terrain import TerrainCostProfile
from .types import Cell, CostMode, Direction, MovementMode

if TYPE_CHECKING:
    from env.schema import NavProfile
    from .tracing import SearchTracer


log = logging.getLogger(__name__)

CARDINAL_STEP_COST = 1.0
DIAGONAL_STEP_COST = math.sqrt(2.0)

DEFAULT_MAX_EXPANSIONS = 10_000

REASON_NO_PATH = "no_path_found"
REASON_MAX_EXPANSIONS = "max_expansions_exhausted"
REASON_TIME_BUDGET = "time_budget_exhausted"

Clock = Callable[[], float]


@dataclass
class PathfindingResult:
    """
    Structured result for a pathfinding attempt.

    `path` excludes the start cell and ends at the goal; it is empty both
    for start == goal (success) and for any failure.
    """

    path: List[Cell]
    success: bool
    reason: str | None = None
    cost: float = 0.0
    expanded: int = 0
    elapsed_s: float = field(default=0.0, compare=False)

    @property
    def aborted(self) -> bool:
        """True if the search gave up on a budget rather than proving no path."""
        return self.reason in (REASON_MAX_EXPANSIONS, REASON_TIME_BUDGET)


def octile_distance(a: Cell, b: Cell) -> float:
    """Octile distance heuristic for A* on an 8-connected grid."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return CARDINAL_STEP_COST * (dx + dy) + (DIAGONAL_STEP_COST - 2 * CARDINAL_STEP_COST) * min(dx, dy)


def step_cost(
    offset: Direction,
    terrain: Any,
    *,
    cost_mode: CostMode,
    movement_mode: MovementMode,
    cost_oracle: Optional[CostFn] = None,
) -> float:
    """
    Cost of one move along `offset` onto a cell with `terrain`.

    In TIME_ELAPSED mode the oracle's value is taken as-is; it may be based
    on a reference agent's stats rather than the searching agent's, which
    is fine since only relative costs steer the search.
    """
    if cost_mode == CostMode.STEP_COUNT:
        return DIAGONAL_STEP_COST if is_diagonal(offset) else CARDINAL_STEP_COST

    if cost_oracle is None:
        raise NavigationError(code="missing_cost_oracle", details={"cost_mode": cost_mode.value})

    seconds = float(cost_oracle(movement_mode, terrain, offset))
    if math.isnan(seconds) or seconds < 0:
        raise NavigationError(
            code="invalid_step_cost",
            details={"seconds": seconds, "direction": offset, "terrain": repr(terrain)},
        )
    return seconds


def find_path(
    passability: PassabilityFn,
    start: Cell,
    goal: Cell,
    *,
    agent_id: Any = None,
    cost_oracle: Optional[CostFn] = None,
    movement_mode: MovementMode = MovementMode.JOG,
    cost_mode: CostMode = CostMode.STEP_COUNT,
    view: Any = None,
    max_expansions: Optional[int] = DEFAULT_MAX_EXPANSIONS,
    max_seconds: Optional[float] = None,
    clock: Clock = time.perf_counter,
) -> PathfindingResult:
    """
    A* search for a route from start to goal.

    Returns a PathfindingResult with:
      - path: cells after start up to and including goal (empty on failure)
      - success: bool
      - reason: if not success, one of no_path_found,
        max_expansions_exhausted, time_budget_exhausted
      - cost: g_score of goal

    Malformed cells raise InvalidCellError and non-positive budgets raise
    ValueError, both before searching. Exceptions raised by the oracles
    propagate unchanged.
    """
    _check_budget(max_expansions, max_seconds)
    start = validate_cell(start, name="start")
    goal = validate_cell(goal, name="goal")
    cost_mode = CostMode(cost_mode)
    movement_mode = MovementMode(movement_mode)

    if cost_mode == CostMode.TIME_ELAPSED and cost_oracle is None:
        raise NavigationError(code="missing_cost_oracle", details={"cost_mode": cost_mode.value})

    if start == goal:
        return PathfindingResult(path=[], success=True)

    grid = OracleGrid(passability=passability, agent_id=agent_id, destination=goal, view=view)

    started_at = clock()

    open_heap: List[Tuple[float, Cell]] = []
    heapq.heappush(open_heap, (0.0, start))

    came_from: Dict[Cell, Cell] = {}
    g_score: Dict[Cell, float] = {start: 0.0}

    expanded = 0
    reason = REASON_NO_PATH

    while open_heap:
        if max_expansions is not None and expanded >= max_expansions:
            reason = REASON_MAX_EXPANSIONS
            break
        if max_seconds is not None and clock() - started_at >= max_seconds:
            reason = REASON_TIME_BUDGET
            break

        _, current = heapq.heappop(open_heap)
        expanded += 1

        if current == goal:
            path = _reconstruct_path(came_from, current)
            log.debug(
                "path found start=%s goal=%s steps=%d cost=%.3f expanded=%d",
                start, goal, len(path), g_score[current], expanded,
            )
            return PathfindingResult(
                path=path,
                success=True,
                cost=g_score[current],
                expanded=expanded,
                elapsed_s=clock() - started_at,
            )

        current_g = g_score[current]

        for move in grid.neighbors_8dir(current):
            tentative_g = current_g + step_cost(
                move.offset,
                move.terrain,
                cost_mode=cost_mode,
                movement_mode=movement_mode,
                cost_oracle=cost_oracle,
            )

            if tentative_g < g_score.get(move.cell, math.inf):
                came_from[move.cell] = current
                g_score[move.cell] = tentative_g
                f_score = tentative_g + octile_distance(move.cell, goal)
                heapq.heappush(open_heap, (f_score, move.cell))

    elapsed = clock() - started_at
    if reason == REASON_NO_PATH:
        log.debug("no path start=%s goal=%s expanded=%d", start, goal, expanded)
    else:
        log.warning(
            "search aborted start=%s goal=%s reason=%s expanded=%d elapsed=%.4fs",
            start, goal, reason, expanded, elapsed,
        )
    return PathfindingResult(path=[], success=False, reason=reason, expanded=expanded, elapsed_s=elapsed)


def _check_budget(max_expansions: Optional[int], max_seconds: Optional[float]) -> None:
    if max_expansions is not None and max_expansions <= 0:
        raise ValueError(f"max_expansions must be positive or None, got {max_expansions!r}")
    if max_seconds is not None and max_seconds <= 0:
        raise ValueError(f"max_seconds must be positive or None, got {max_seconds!r}")


def _reconstruct_path(
    came_from: Dict[Cell, Cell],
    current: Cell,
) -> List[Cell]:
    """Walk came_from back to start; the start cell itself is dropped."""
    path: List[Cell] = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.pop()
    path.reverse()
    return path


class GridPathfinder:
    """
    Reusable pathfinder bound to a pair of oracles and a search budget.

    Holds no per-search state, so one instance may serve concurrent
    callers as long as the oracles are safe for concurrent reads.
    """

    def __init__(
        self,
        passability: PassabilityFn,
        cost_oracle: Optional[CostFn] = None,
        *,
        view: Any = None,
        max_expansions: Optional[int] = DEFAULT_MAX_EXPANSIONS,
        max_seconds: Optional[float] = None,
        default_cost_mode: CostMode = CostMode.STEP_COUNT,
        tracer: Optional["SearchTracer"] = None,
        clock: Clock = time.perf_counter,
    ) -> None:
        _check_budget(max_expansions, max_seconds)

        self.passability = passability
        self.cost_oracle = cost_oracle
        self.view = view
        self.max_expansions = max_expansions
        self.max_seconds = max_seconds
        self.default_cost_mode = CostMode(default_cost_mode)
        self._tracer = tracer
        self._clock = clock

    @classmethod
    def from_profile(
        cls,
        passability: PassabilityFn,
        profile: "NavProfile",
        *,
        cost_oracle: Optional[CostFn] = None,
        view: Any = None,
        tracer: Optional["SearchTracer"] = None,
    ) -> "GridPathfinder":
        """
        Build a pathfinder from a loaded NavProfile.

        Without an explicit cost_oracle, the profile's movement costs are
        used as a reference-agent TerrainCostProfile.
        """
        if cost_oracle is None:
            cost_oracle = TerrainCostProfile.from_movement_costs(profile.movement)

        return cls(
            passability,
            cost_oracle,
            view=view,
            max_expansions=profile.budget.max_expansions,
            max_seconds=profile.budget.max_seconds,
            default_cost_mode=CostMode(profile.default_cost_mode),
            tracer=tracer,
        )

    def find_path(
        self,
        agent_id: Any,
        start: Cell,
        end: Cell,
        *,
        movement_mode: MovementMode = MovementMode.JOG,
        cost_mode: Optional[CostMode] = None,
    ) -> PathfindingResult:
        """Plan a route for `agent_id`; see module-level find_path."""
        mode = self.default_cost_mode if cost_mode is None else CostMode(cost_mode)

        result = find_path(
            self.passability,
            start,
            end,
            agent_id=agent_id,
            cost_oracle=self.cost_oracle,
            movement_mode=movement_mode,
            cost_mode=mode,
            view=self.view,
            max_expansions=self.max_expansions,
            max_seconds=self.max_seconds,
            clock=self._clock,
        )

        if self._tracer is not None:
            self._tracer.record(
                agent_id=agent_id,
                start=start,
                goal=end,
                cost_mode=mode,
                movement_mode=MovementMode(movement_mode),
                result=result,
            )

        return result
