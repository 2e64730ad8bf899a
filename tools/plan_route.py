#!/usr/bin/env python3
"""
tools/plan_route.py

Plan a route over an ASCII map and print it.

Map format (row = y, column = x):
    #   wall
    .   flatlands
    ^   hills
    T   forest
    M   mountains
    ~   water (impassable in the shipped profiles)
    S   start
    G   goal

Examples:
    python tools/plan_route.py tools/maps/ridge.txt
    python tools/plan_route.py tools/maps/ridge.txt --moves --profile moves
    python tools/plan_route.py tools/maps/ridge.txt --mode run --budget-seconds 60
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# ---------------------------------------------------------------------------
# Ensure src/ is on sys.path when running as a script
# ---------------------------------------------------------------------------

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# ---------------------------------------------------------------------------
# Imports from the project
# ---------------------------------------------------------------------------

from env.loader import load_nav_profile  # type: ignore[import]
from gridnav import (  # type: ignore[import]
    CostMode,
    GridPathfinder,
    MovementMode,
    SearchTracer,
    path_to_actions,
    tile_map_from_rows,
    truncate_route,
)
from gridnav.logging_config import configure_logging  # type: ignore[import]

log = logging.getLogger("tools.plan_route")

LEGEND: Dict[str, str] = {
    "^": "hills",
    "T": "forest",
    "M": "mountains",
    "~": "water",
}

AGENT_ID = "player"


def render(rows: List[str], route: List[tuple], mark: str = "*") -> str:
    """Overlay `route` onto the map rows, keeping S and G visible."""
    grid = [list(row.rstrip("\n")) for row in rows]
    for x, y in route:
        if 0 <= y < len(grid) and 0 <= x < len(grid[y]) and grid[y][x] not in ("S", "G"):
            grid[y][x] = mark
    return "\n".join("".join(row) for row in grid)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plan a route over an ASCII map.")
    parser.add_argument("map", type=Path, help="Path to an ASCII map file.")
    parser.add_argument("--config", type=Path, default=None, help="navigation.yaml to load.")
    parser.add_argument("--profile", default=None, help="Profile name inside the config.")
    parser.add_argument(
        "--moves",
        action="store_true",
        help="Minimise tile count instead of elapsed time.",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in MovementMode],
        default=MovementMode.JOG.value,
        help="Movement mode used for time costs.",
    )
    parser.add_argument(
        "--budget-seconds",
        type=float,
        default=None,
        help="Trim the route to what fits in this many simulated seconds.",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    profile = load_nav_profile(args.config, args.profile)
    rows = args.map.read_text(encoding="utf-8").splitlines()

    tiles, markers = tile_map_from_rows(rows, legend=LEGEND)
    tiles.impassable_terrain = frozenset(profile.impassable_terrain)

    if "S" not in markers or "G" not in markers:
        log.error("Map %s needs both an S (start) and a G (goal) marker", args.map)
        return 2

    start, goal = markers["S"], markers["G"]
    tiles.place(AGENT_ID, start)

    pathfinder = GridPathfinder.from_profile(tiles.passability, profile, tracer=SearchTracer())
    movement_mode = MovementMode(args.mode)
    cost_mode = CostMode.STEP_COUNT if args.moves else None

    result = pathfinder.find_path(AGENT_ID, start, goal, movement_mode=movement_mode, cost_mode=cost_mode)

    if not result.success:
        print(f"No route from {start} to {goal}: {result.reason} (expanded {result.expanded})")
        return 1

    route = result.path
    if args.budget_seconds is not None:
        route = truncate_route(
            tiles.passability,
            start,
            route,
            args.budget_seconds,
            cost_oracle=pathfinder.cost_oracle,
            agent_id=AGENT_ID,
            movement_mode=movement_mode,
        )

    print(render(rows, route))
    print()
    print(f"steps={len(route)} of {len(result.path)} cost={result.cost:.2f} expanded={result.expanded}")
    for action in path_to_actions(result, AGENT_ID, mode=movement_mode)[: len(route)]:
        print(f"  move {action.actor_id} -> {action.destination} ({action.mode.value})")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
