"""Global pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from fdenum.logging import reset_logging

INTEGRATION_DIR = Path(__file__).parent / "integration"


@pytest.fixture
def integration_dir() -> Path:
    """Directory holding the YAML problem fixtures."""
    return INTEGRATION_DIR


@pytest.fixture(autouse=True)
def fresh_logging():
    """Reset package logging around every test.

    The CLI binds its stdout handler lazily, so a handler created inside one
    test must not outlive that test's captured stream.
    """
    reset_logging()
    yield
    reset_logging()
