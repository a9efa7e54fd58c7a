"""Shared fixtures for waypoint tests."""

import pytest

from waypoint.config import NavigationConfig
from waypoint.state.registry import StateRegistry


@pytest.fixture
def registry() -> StateRegistry:
    """Registry with diagnostics enabled."""
    return StateRegistry(NavigationConfig(debug=True))


@pytest.fixture
def quiet_registry() -> StateRegistry:
    return StateRegistry()
