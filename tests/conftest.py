"""Shared test configuration."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo logging configuration done by the CLI between tests."""
    yield
    structlog.reset_defaults()
