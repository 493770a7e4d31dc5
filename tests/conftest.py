"""Pytest configuration and fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging() calls so tests don't leak handlers into each other."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def mixed_width_text() -> str:
    """Text whose non-ASCII characters have UTF-8 widths of 3, 2 and 4 bytes."""
    return "a€b¢c😀d"
