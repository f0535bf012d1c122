from datetime import datetime, timedelta, UTC

import pytest

from ephemeralpaste.constants import ENV


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def t0() -> datetime:
    return datetime(2025, 10, 15, tzinfo=UTC)


@pytest.fixture
def clock(t0) -> FakeClock:
    return FakeClock(t0)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Start every test from an environment without application settings."""
    for group in (ENV.App, ENV.Store, ENV.Redis):
        for name in group:
            monkeypatch.delenv(name, raising=False)
