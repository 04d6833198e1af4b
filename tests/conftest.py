"""
Shared pytest fixtures and configuration for periodchain tests.

This module provides:
- Settings cache and environment cleanup for test isolation
- Fixed reference instants
- Chain builders for the common schedule shapes
"""

import os
import sys
from collections.abc import Callable, Generator
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import structlog

# Ensure periodchain package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from periodchain.core.chain import TimePeriodChain
from periodchain.core.period import Period
from periodchain.core.settings import clear_settings_cache


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Drop PERIODCHAIN_* env vars and the settings cache around each test.

    Chains read their default insert mode from settings, so a leftover
    env var or cached instance would leak between tests.
    """
    for key in list(os.environ):
        if key.startswith("PERIODCHAIN_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(Path(__file__).parent)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Time Fixtures
# =============================================================================


@pytest.fixture
def nine_am() -> datetime:
    """Friday 2026-01-09 09:00, the start of every sample schedule."""
    return datetime(2026, 1, 9, 9, 0)


@pytest.fixture
def half_hour() -> timedelta:
    return timedelta(minutes=30)


@pytest.fixture
def make_chain(nine_am: datetime) -> Callable[..., TimePeriodChain]:
    """
    Build an adjacent chain from durations given in minutes.

        chain = make_chain(30, 60, 15)  # 09:00-09:30, 09:30-10:30, 10:30-10:45
    """

    def _make(*minutes: int, **kwargs) -> TimePeriodChain:
        chain = TimePeriodChain(**kwargs)
        start = nine_am
        for m in minutes:
            period = Period.from_start(start, timedelta(minutes=m))
            chain.periods.append(period)
            start = period.end
        return chain

    return _make


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo any configure_logging() call made by a test."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
