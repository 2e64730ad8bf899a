# tests/test_logging_config.py

from __future__ import annotations

import logging
import sys

import pytest

from gridnav.logging_config import LOG_FORMAT, configure_logging, resolve_level


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def _stdout_handlers(logger: logging.Logger):
    return [
        h
        for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout
    ]


def test_resolve_level() -> None:
    assert resolve_level(logging.WARNING) == logging.WARNING
    assert resolve_level("debug") == logging.DEBUG
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_configure_logging_adds_single_stdout_handler(clean_root_logger: logging.Logger) -> None:
    # pytest attaches its capture handlers for the call phase; start empty.
    clean_root_logger.handlers = []

    configure_logging("INFO")
    handlers = _stdout_handlers(clean_root_logger)
    assert len(handlers) == 1
    assert handlers[0].formatter._fmt == LOG_FORMAT

    configure_logging("DEBUG")
    assert _stdout_handlers(clean_root_logger) == handlers
    assert len(clean_root_logger.handlers) == 1
    assert clean_root_logger.level == logging.DEBUG


def test_configure_logging_keeps_existing_handlers(clean_root_logger: logging.Logger) -> None:
    existing = logging.NullHandler()
    clean_root_logger.handlers = [existing]

    configure_logging(logging.WARNING)

    assert clean_root_logger.handlers == [existing]
    assert clean_root_logger.level == logging.WARNING
