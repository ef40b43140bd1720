"""Root conftest — shared clock, settings and store fixtures.

Invariants:
    - Time only moves when a test calls clock.advance()
    - Every test gets a fresh SessionStore; no state leaks between tests
"""

from datetime import datetime, timedelta, timezone

import pytest

from burnerlink.config import Settings
from burnerlink.api.dependencies import build_store


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        pro_device_ids=["pro-device"],
        log_format="text",
    )


@pytest.fixture
def store(settings, clock):
    return build_store(settings, clock=clock)


@pytest.fixture
def payload():
    return {"ciphertext": "c", "nonce": "n"}
