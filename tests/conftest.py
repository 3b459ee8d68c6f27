"""Shared fixtures for the store test suites."""

import sys
from pathlib import Path

import pytest

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from store_logger import LoggerFactory


@pytest.fixture(autouse=True)
def reset_loggers():
    """Each test starts with a fresh set of named loggers."""
    yield
    LoggerFactory.close_all()
