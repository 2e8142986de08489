"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import pytest

from feed_proxy_core.config.settings import Settings
from tests.mocks.mock_settings import make_settings
from tests.mocks.mock_upstream import FakeClock, FakeFetcher, RecordingReporter


@pytest.fixture
def settings() -> Settings:
    """Return Settings with test defaults."""
    return make_settings()


@pytest.fixture
def fetcher() -> FakeFetcher:
    """Return a fetcher with no canned responses."""
    return FakeFetcher()


@pytest.fixture
def clock() -> FakeClock:
    """Return a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def reporter() -> RecordingReporter:
    """Return a reporter that records events."""
    return RecordingReporter()
