"""Shared fixtures: a controllable clock for expiry tests."""
from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 31, 12, 0, 0, tzinfo=timezone.utc))
