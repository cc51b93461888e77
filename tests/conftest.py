"""
Shared pytest fixtures and configuration for rxlite tests.
"""

import pytest

from rxlite import VirtualTimeScheduler
from rxlite.config import _reset_config
from rxlite.testing import Recorder


@pytest.fixture(autouse=True)
def reset_config():
    """Reset process-wide configuration around each test to prevent state leakage."""
    _reset_config()
    yield
    _reset_config()


@pytest.fixture
def scheduler():
    """Provide a fresh virtual clock starting at 0."""
    return VirtualTimeScheduler()


@pytest.fixture
def recorder(scheduler):
    """Provide a recorder stamping notifications with the virtual clock."""
    return Recorder(scheduler)
