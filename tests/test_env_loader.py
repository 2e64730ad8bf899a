# tests/test_env_loader.py
"""
Tests for env.loader.load_nav_profile.

Covers:
- the shipped config/navigation.yaml
- profile selection and override
- validation failures
"""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from env.loader import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH, load_nav_profile
from gridnav import CostMode, GridPathfinder, TerrainCostProfile, TileMap


def _write_yaml(path: Path, text: str) -> Path:
    path.write_text(dedent(text), encoding="utf-8")
    return path


VALID = """
profile: fast
profiles:
  fast:
    default_cost_mode: step_count
    budget:
      max_expansions: 100
      max_seconds: 0.05
    movement:
      seconds_per_tile: {walk: 9, jog: 6, run: 3}
      diagonal_multiplier: 1.5
      terrain_multipliers: {swamp: 4}
    impassable_terrain: [lava]
  slow:
    default_cost_mode: time_elapsed
    budget: {max_expansions: null, max_seconds: null}
    movement:
      seconds_per_tile: {walk: 20, jog: 15, run: 10}
"""


def test_shipped_config_loads() -> None:
    profile = load_nav_profile(DEFAULT_CONFIG_PATH)

    assert profile.name == "default"
    assert profile.default_cost_mode in ("step_count", "time_elapsed")
    assert set(profile.movement.seconds_per_tile) == {"walk", "jog", "run"}
    assert profile.budget.max_expansions is None or profile.budget.max_expansions > 0


def test_shipped_config_has_all_named_profiles() -> None:
    for name in ("default", "interactive", "moves"):
        assert load_nav_profile(DEFAULT_CONFIG_PATH, name).name == name


def test_load_selected_profile(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "navigation.yaml", VALID)

    profile = load_nav_profile(path)

    assert profile.name == "fast"
    assert profile.default_cost_mode == "step_count"
    assert profile.budget.max_expansions == 100
    assert profile.budget.max_seconds == pytest.approx(0.05)
    assert profile.movement.seconds_per_tile == {"walk": 9.0, "jog": 6.0, "run": 3.0}
    assert profile.movement.diagonal_multiplier == pytest.approx(1.5)
    assert profile.movement.terrain_multipliers == {"swamp": 4.0}
    assert profile.impassable_terrain == ("lava",)


def test_profile_override_and_null_budget(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "navigation.yaml", VALID)

    profile = load_nav_profile(path, profile="slow")

    assert profile.name == "slow"
    assert profile.budget.max_expansions is None
    assert profile.budget.max_seconds is None
    assert profile.movement.terrain_multipliers == {}


def test_env_var_points_at_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write_yaml(tmp_path / "custom.yaml", VALID)
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_nav_profile().name == "fast"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_nav_profile(tmp_path / "nope.yaml")


def test_unknown_profile(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "navigation.yaml", VALID)

    with pytest.raises(KeyError):
        load_nav_profile(path, profile="missing")


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "profiles: {}\n",
        "profile: a\nprofiles: [1, 2]\n",
        """
        profile: a
        profiles:
          a:
            default_cost_mode: fastest
            movement:
              seconds_per_tile: {walk: 1, jog: 1, run: 1}
        """,
        """
        profile: a
        profiles:
          a:
            budget: {max_expansions: 0}
            movement:
              seconds_per_tile: {walk: 1, jog: 1, run: 1}
        """,
        """
        profile: a
        profiles:
          a:
            movement:
              seconds_per_tile: {walk: 1, jog: 1}
        """,
        """
        profile: a
        profiles:
          a:
            movement:
              seconds_per_tile: {walk: 1, jog: 1, run: 1, fly: 0.1}
        """,
        """
        profile: a
        profiles:
          a:
            movement:
              seconds_per_tile: {walk: 1, jog: -1, run: 1}
        """,
    ],
)
def test_invalid_configs_raise_value_error(tmp_path: Path, text: str) -> None:
    path = _write_yaml(tmp_path / "navigation.yaml", text)

    with pytest.raises(ValueError):
        load_nav_profile(path)


@pytest.mark.parametrize("value", ["2.9", "true", "'100'"])
def test_max_expansions_must_be_an_integer(tmp_path: Path, value: str) -> None:
    text = f"""
    profile: a
    profiles:
      a:
        budget: {{max_expansions: {value}}}
        movement:
          seconds_per_tile: {{walk: 1, jog: 1, run: 1}}
    """
    path = _write_yaml(tmp_path / "navigation.yaml", text)

    with pytest.raises(ValueError, match="max_expansions"):
        load_nav_profile(path)


def test_integer_max_seconds_is_accepted(tmp_path: Path) -> None:
    text = """
    profile: a
    profiles:
      a:
        budget: {max_seconds: 2}
        movement:
          seconds_per_tile: {walk: 1, jog: 1, run: 1}
    """
    profile = load_nav_profile(_write_yaml(tmp_path / "navigation.yaml", text))

    assert profile.budget.max_seconds == 2.0
    assert isinstance(profile.budget.max_seconds, float)


@pytest.mark.parametrize("value", ["water", "{water: 1}"])
def test_impassable_terrain_must_be_a_list(tmp_path: Path, value: str) -> None:
    text = f"""
    profile: a
    profiles:
      a:
        movement:
          seconds_per_tile: {{walk: 1, jog: 1, run: 1}}
        impassable_terrain: {value}
    """
    path = _write_yaml(tmp_path / "navigation.yaml", text)

    with pytest.raises(ValueError, match="impassable_terrain"):
        load_nav_profile(path)


def test_pathfinder_from_profile(tmp_path: Path) -> None:
    profile = load_nav_profile(_write_yaml(tmp_path / "navigation.yaml", VALID))
    tiles = TileMap(terrain={(1, 0): "swamp"})

    finder = GridPathfinder.from_profile(tiles.passability, profile)

    assert finder.max_expansions == 100
    assert finder.max_seconds == pytest.approx(0.05)
    assert finder.default_cost_mode == CostMode.STEP_COUNT
    assert isinstance(finder.cost_oracle, TerrainCostProfile)

    result = finder.find_path("hero", (0, 0), (2, 0), cost_mode=CostMode.TIME_ELAPSED)
    assert result.success
    assert (1, 0) not in result.path
