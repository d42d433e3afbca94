"""Pytest configuration and fixtures for cmdp tests."""

import logging

import pytest

from cmdp import CommandDefinition, parse_none
from test_helpers import RecordingStream


@pytest.fixture
def diagnostics():
    """Capture diagnostics written by the processor."""
    return RecordingStream()


@pytest.fixture
def noop_command():
    """A minimal valid command definition."""
    return CommandDefinition(
        short_name="t",
        long_name="test",
        help="Just a test function!",
        parser=parse_none(),
        runner=lambda args: None,
    )


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo global logging changes made by the CLI under test."""
    yield
    logging.disable(logging.NOTSET)
    root = logging.getLogger()
    root.setLevel(logging.WARNING)
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def frozen_time():
    """Freeze time for consistent log timestamps."""
    from freezegun import freeze_time
    with freeze_time("2026-02-09 10:00:00"):
        yield
