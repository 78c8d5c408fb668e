"""Shared fixtures for safety layer tests."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest


class FakeClock:
    """Controllable time source."""

    def __init__(self, start: datetime = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def no_redis():
    """Force the intervention store onto its in-memory fallback."""
    with patch(
        "app.safety.intervention_store.get_redis",
        new=AsyncMock(return_value=None),
    ) as mocked:
        yield mocked
