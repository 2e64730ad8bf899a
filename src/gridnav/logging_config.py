# src/gridnav/logging_config.py
"""
Central logging configuration for gridnav tools.

Call configure_logging() once from your entrypoint, for example:

    from gridnav.logging_config import configure_logging
    configure_logging("DEBUG")

After that, search traces (gridnav.search) and aborted-search warnings
(gridnav.pathfinder) are visible on stdout. Library code never calls this.
"""

from __future__ import annotations

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Accept logging.DEBUG-style ints or names like "debug"."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Attach a stdout handler to the root logger unless one is already there.

    The level is applied either way, so a second call can still turn on
    DEBUG output.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    if root.handlers:
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(handler)
