# src/gridnav/tracing.py
"""
Tracing for gridnav searches.

A thin, structured logging layer around pathfinding so callers can see
how expensive their queries are and how often they hit the search budget.

It does NOT:
- Change search behavior
- Retry or re-plan
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, List, Optional

from .pathfinder import REASON_NO_PATH, PathfindingResult
from .types import Cell, CostMode, MovementMode


@dataclass
class SearchTraceRecord:
    """Structured record of a single pathfinding call."""

    timestamp: float           # wall-clock time (time.time())
    elapsed_s: float           # search duration in seconds

    agent_id: Any
    start: Cell
    goal: Cell
    cost_mode: str
    movement_mode: str

    success: bool
    reason: Optional[str]
    steps: int
    cost: float
    expanded: int


class SearchTracer:
    """
    In-memory search tracer with optional logging.

    Responsibilities:
    - Keep a rolling buffer of recent SearchTraceRecord entries.
    - Emit a single structured log line per search (info level).
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        max_records: int = 10_000,
    ) -> None:
        self._logger = logger or logging.getLogger("gridnav.search")
        self._records: Deque[SearchTraceRecord] = deque(maxlen=max_records)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def record(
        self,
        *,
        agent_id: Any,
        start: Cell,
        goal: Cell,
        cost_mode: CostMode,
        movement_mode: MovementMode,
        result: PathfindingResult,
    ) -> None:
        """Record a finished search, successful or not."""
        try:
            record = SearchTraceRecord(
                timestamp=time.time(),
                elapsed_s=float(result.elapsed_s),
                agent_id=agent_id,
                start=tuple(start),
                goal=tuple(goal),
                cost_mode=CostMode(cost_mode).value,
                movement_mode=MovementMode(movement_mode).value,
                success=bool(result.success),
                reason=result.reason,
                steps=len(result.path),
                cost=float(result.cost),
                expanded=int(result.expanded),
            )
        except Exception:
            # Tracing must never crash the caller.
            self._logger.exception("Failed to build SearchTraceRecord")
            return

        self._records.append(record)

        self._logger.info(
            "path_search agent=%s start=%s goal=%s mode=%s/%s success=%s reason=%s "
            "steps=%d cost=%.3f expanded=%d duration=%.4fs",
            record.agent_id,
            record.start,
            record.goal,
            record.cost_mode,
            record.movement_mode,
            record.success,
            record.reason,
            record.steps,
            record.cost,
            record.expanded,
            record.elapsed_s,
        )

    def get_records(self) -> List[SearchTraceRecord]:
        """Return a snapshot of all currently buffered records."""
        return list(self._records)

    def abort_count(self) -> int:
        """How many buffered searches gave up on their budget."""
        return sum(1 for r in self._records if not r.success and r.reason != REASON_NO_PATH)
