# tests/test_nav_grid.py
"""
Tests for OracleGrid neighbor enumeration and cell validation.
"""

from __future__ import annotations

import pytest

from gridnav.grid import NEIGHBOR_OFFSETS, InvalidCellError, OracleGrid, validate_cell
from tests.fakes.fake_world import FakePassability


def make_grid(**kwargs) -> OracleGrid:
    return OracleGrid(passability=FakePassability(**kwargs), agent_id="a1", destination=(9, 9), view="world")


def test_open_cell_has_eight_neighbors_in_offset_order() -> None:
    grid = make_grid()

    moves = grid.neighbors_8dir((0, 0))

    assert [m.offset for m in moves] == list(NEIGHBOR_OFFSETS)
    assert [m.cell for m in moves[:4]] == [(0, -1), (0, 1), (-1, 0), (1, 0)]
    assert [m.diagonal for m in moves] == [False] * 4 + [True] * 4


def test_blocked_orthogonal_removes_adjacent_diagonals() -> None:
    grid = make_grid(blocked={(1, 0)})

    cells = {m.cell for m in grid.neighbors_8dir((0, 0))}

    assert (1, 0) not in cells
    # both diagonals that would slip past (1, 0) are gone
    assert (1, -1) not in cells
    assert (1, 1) not in cells
    assert {(-1, -1), (-1, 1)} <= cells


def test_blocked_diagonal_cell_is_skipped_without_touching_orthogonals() -> None:
    grid = make_grid(blocked={(1, 1)})

    cells = {m.cell for m in grid.neighbors_8dir((0, 0))}

    assert (1, 1) not in cells
    assert {(1, 0), (0, 1)} <= cells
    assert len(cells) == 7


def test_neighbors_carry_oracle_terrain() -> None:
    grid = make_grid(terrain={(0, 1): "swamp"})

    by_cell = {m.cell: m.terrain for m in grid.neighbors_8dir((0, 0))}

    assert by_cell[(0, 1)] == "swamp"
    assert by_cell[(1, 0)] == "open"


def test_query_passes_view_agent_and_destination() -> None:
    oracle = FakePassability()
    grid = OracleGrid(passability=oracle, agent_id="a1", destination=(4, 4), view="local")

    assert grid.query((2, 3)) == (True, "open")
    assert oracle.calls == [((2, 3), "local", "a1", (4, 4))]


def test_terrain_at_blocked_cell_is_none() -> None:
    grid = make_grid(blocked={(3, 3)}, terrain={(2, 2): "sand"})

    assert grid.terrain_at((3, 3)) is None
    assert grid.terrain_at((2, 2)) == "sand"


def test_validate_cell_accepts_lists_and_integral_floats() -> None:
    assert validate_cell([4, -2]) == (4, -2)
    assert validate_cell((2.0, -0.0)) == (2, 0)


def test_validate_cell_reports_name_and_value() -> None:
    with pytest.raises(InvalidCellError) as excinfo:
        validate_cell((1.25, 0), name="goal")

    err = excinfo.value
    assert err.code == "invalid_cell"
    assert err.details["name"] == "goal"
    assert "1.25" in err.details["value"]
    assert isinstance(err, ValueError)
    assert "invalid_cell" in str(err)
