# src/env/__init__.py
"""Navigation configuration: YAML profiles resolved into dataclasses."""

from __future__ import annotations

from .loader import load_nav_profile
from .schema import MovementCosts, NavProfile, SearchBudget

__all__ = ["load_nav_profile", "MovementCosts", "NavProfile", "SearchBudget"]
