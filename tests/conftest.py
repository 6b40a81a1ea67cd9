"""Session-wide test configuration."""

from __future__ import annotations

import pytest

from kubespy.observability.logging import setup_logging


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging() -> None:
    """Route structlog output to stderr at warning level, as in production."""
    setup_logging("warning")
