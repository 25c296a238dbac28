"""Pytest configuration for locpattern tests."""

from pathlib import Path

import pytest

from locpattern.engine import ExpansionLimits


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def rules_dir() -> Path:
    """Return the path to the rules directory."""
    return Path(__file__).parent.parent / "rules"


@pytest.fixture
def small_limits() -> ExpansionLimits:
    """Limits small enough to trip in a unit test."""
    return ExpansionLimits(max_nodes=50, max_pattern_length=200)