# gridnav package
# src/gridnav/__init__.py
"""
Grid navigation for agents on an open 2D grid.

Provides:
- GridPathfinder / find_path: A* with corner-cutting prevention and a search budget
- OracleGrid: neighbor queries over a passability oracle
- TileMap, TerrainCostProfile: reference passability and time-cost oracles
- path_to_actions, truncate_route: turn routes into queued MoveActions
"""

from __future__ import annotations

from .types import Cell, CostMode, Direction, MoveAction, MovementMode
from .grid import CostFn, InvalidCellError, NavigationError, OracleGrid, PassabilityFn, validate_cell
from .pathfinder import GridPathfinder, PathfindingResult, find_path, octile_distance
from .terrain import TerrainCostProfile, TileMap, tile_map_from_rows
from .mover import path_to_actions, route_cost, route_step_costs, truncate_route
from .tracing import SearchTracer, SearchTraceRecord

__all__ = [
    "Cell",
    "CostMode",
    "Direction",
    "MoveAction",
    "MovementMode",
    "CostFn",
    "PassabilityFn",
    "InvalidCellError",
    "NavigationError",
    "OracleGrid",
    "validate_cell",
    "GridPathfinder",
    "PathfindingResult",
    "find_path",
    "octile_distance",
    "TerrainCostProfile",
    "TileMap",
    "tile_map_from_rows",
    "path_to_actions",
    "route_cost",
    "route_step_costs",
    "truncate_route",
    "SearchTracer",
    "SearchTraceRecord",
]
