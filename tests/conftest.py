"""Shared fixtures for markrunner tests."""

import pytest

import samples
from markrunner.registry import Registry


@pytest.fixture(autouse=True)
def reset_events():
    """Clear the lifecycle event log between tests."""
    samples.EVENTS.clear()
    samples.LifecycleSuite.instances = 0
    yield
    samples.EVENTS.clear()


@pytest.fixture
def registry():
    """Create an empty registry."""
    return Registry()
