"""Shared pytest configuration and fixtures for Relay Gateway tests."""

import pytest

from relay.core.config.schema import ConfigSchema
from relay.core.messages import ChatMessage
from tests.fixtures.fake_providers import make_registry


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, no external deps)")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires services)"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        path = str(item.fspath)
        if "tests/unit/" in path or "tests/cli/" in path:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Start every test from an environment without any gateway settings.

    Values picked up from a developer's .env file would otherwise leak into
    Config() instances built by the tests.
    """
    for name in ConfigSchema.all_specs():
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def registry():
    return make_registry()


@pytest.fixture
def user_messages():
    return [ChatMessage(role="user", content="Hi there")]
