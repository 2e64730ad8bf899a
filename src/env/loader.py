from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .schema import MovementCosts, NavProfile, SearchBudget


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "navigation.yaml"

# Lets deployments point at another file without code changes.
CONFIG_ENV_VAR = "GRIDNAV_CONFIG"

COST_MODES = ("step_count", "time_elapsed")
MOVEMENT_MODES = ("walk", "jog", "run")


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from disk."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _select_profile(cfg: Dict[str, Any], override: Optional[str]) -> Tuple[str, Dict[str, Any]]:
    """Return (active_profile_name, active_profile_mapping)."""
    profile_name = override or cfg.get("profile")
    if not profile_name:
        raise ValueError("navigation.yaml must define a 'profile' key.")
    profiles = cfg.get("profiles")
    if not isinstance(profiles, dict):
        raise ValueError("navigation.yaml must define a 'profiles' mapping.")
    if profile_name not in profiles:
        raise KeyError(f"Profile '{profile_name}' not found in navigation.yaml profiles.")
    profile = profiles[profile_name]
    if not isinstance(profile, dict):
        raise ValueError(f"Profile '{profile_name}' must be a mapping, got {type(profile)}")
    return profile_name, profile


def _optional_positive(raw: Dict[str, Any], key: str, types: tuple) -> Any:
    value = raw.get(key)
    if value is None:
        return None
    # bool is an int subclass; YAML `true` is not a budget.
    if isinstance(value, bool) or not isinstance(value, types):
        expected = " or ".join(t.__name__ for t in types)
        raise ValueError(f"budget.{key} must be {expected} or null, got {value!r}")
    if value <= 0:
        raise ValueError(f"budget.{key} must be positive or null, got {value!r}")
    return value


def _parse_budget(raw: Dict[str, Any]) -> SearchBudget:
    max_seconds = _optional_positive(raw, "max_seconds", (int, float))
    return SearchBudget(
        max_expansions=_optional_positive(raw, "max_expansions", (int,)),
        max_seconds=None if max_seconds is None else float(max_seconds),
    )


def _parse_movement(raw: Dict[str, Any]) -> MovementCosts:
    per_tile_raw = raw.get("seconds_per_tile") or {}
    if not isinstance(per_tile_raw, dict):
        raise ValueError("movement.seconds_per_tile must be a mapping.")

    seconds_per_tile: Dict[str, float] = {}
    for mode, seconds in per_tile_raw.items():
        if mode not in MOVEMENT_MODES:
            raise ValueError(f"Unknown movement mode in seconds_per_tile: {mode!r}")
        seconds_per_tile[mode] = float(seconds)

    missing = [m for m in MOVEMENT_MODES if m not in seconds_per_tile]
    if missing:
        raise ValueError(f"movement.seconds_per_tile is missing modes: {missing}")

    terrain_raw = raw.get("terrain_multipliers") or {}
    if not isinstance(terrain_raw, dict):
        raise ValueError("movement.terrain_multipliers must be a mapping.")

    return MovementCosts(
        seconds_per_tile=seconds_per_tile,
        diagonal_multiplier=float(raw.get("diagonal_multiplier", math.sqrt(2.0))),
        terrain_multipliers={str(k): float(v) for k, v in terrain_raw.items()},
    )


def _validate_profile(profile: NavProfile) -> None:
    """Minimal sanity checks for a navigation profile."""
    if profile.default_cost_mode not in COST_MODES:
        raise ValueError(f"Invalid default_cost_mode: {profile.default_cost_mode}")

    # negative or NaN costs would break A*'s strict-improvement guarantee
    for mode, seconds in profile.movement.seconds_per_tile.items():
        if not math.isfinite(seconds) or seconds < 0:
            raise ValueError(f"seconds_per_tile[{mode}] must be a finite value >= 0, got {seconds}")
    for kind, mult in profile.movement.terrain_multipliers.items():
        if not math.isfinite(mult) or mult < 0:
            raise ValueError(f"terrain_multipliers[{kind}] must be a finite value >= 0, got {mult}")
    if not math.isfinite(profile.movement.diagonal_multiplier) or profile.movement.diagonal_multiplier < 0:
        raise ValueError(
            f"diagonal_multiplier must be a finite value >= 0, got {profile.movement.diagonal_multiplier}"
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_nav_profile(path: Optional[Path] = None, profile: Optional[str] = None) -> NavProfile:
    """
    Main entry point: returns the resolved NavProfile.

    Lookup order for the file: explicit `path`, then $GRIDNAV_CONFIG, then
    config/navigation.yaml. `profile` overrides the file's `profile` key.
    """
    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    cfg = _load_yaml(Path(path))
    name, raw = _select_profile(cfg, profile)

    budget_raw = raw.get("budget") or {}
    movement_raw = raw.get("movement") or {}
    if not isinstance(budget_raw, dict) or not isinstance(movement_raw, dict):
        raise ValueError(f"Profile '{name}': 'budget' and 'movement' must be mappings.")

    impassable_raw = raw.get("impassable_terrain") or []
    if not isinstance(impassable_raw, list):
        raise ValueError(f"Profile '{name}': 'impassable_terrain' must be a list of terrain labels.")

    nav_profile = NavProfile(
        name=name,
        default_cost_mode=str(raw.get("default_cost_mode", "step_count")),
        budget=_parse_budget(budget_raw),
        movement=_parse_movement(movement_raw),
        impassable_terrain=tuple(str(t) for t in impassable_raw),
    )

    _validate_profile(nav_profile)
    return nav_profile
