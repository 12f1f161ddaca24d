"""Workspace-level pytest configuration and fixtures.

This file provides shared fixtures and configuration for all tests across
the entire monorepo workspace.
"""

import logging
from collections.abc import Generator

import pytest

_PROJECT_LOGGERS = ("goimpl", "goimpl_analyser")


@pytest.fixture(autouse=True, scope="function")
def isolate_logging_state() -> Generator[None]:
    """Automatically preserve and restore logging state for each test.

    The CLI configures logging through dictConfig, which replaces root
    handlers and sets project logger levels. Restoring them keeps caplog
    based tests independent of execution order.
    """
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_root_level = root.level
    saved_levels = {name: logging.getLogger(name).level for name in _PROJECT_LOGGERS}

    yield  # Test runs here

    root.handlers = saved_handlers
    root.setLevel(saved_root_level)
    for name, level in saved_levels.items():
        logging.getLogger(name).setLevel(level)
