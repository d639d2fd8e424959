"""Shared test fixtures.

Model factories live in factories.py so test modules can import them.
"""

import logging

import pytest

from factories import make_price
from funnel_readiness.models import Price


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers and levels installed by setup_logging() or the CLI."""
    package_logger = logging.getLogger("funnel_readiness")
    level = package_logger.level
    handlers = package_logger.handlers[:]
    yield
    package_logger.setLevel(level)
    package_logger.handlers[:] = handlers


@pytest.fixture
def synced_anchor_price() -> Price:
    """A synced price that keeps the workspace-level Stripe check quiet."""
    return make_price("ANCHOR", synced=True)
