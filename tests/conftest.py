"""Shared pytest fixtures."""

import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to a test's captured stderr once the test ends."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
