"""API test fixtures — isolated app per test with a fake clock.

Invariants:
    - Every test gets its own app and SessionStore (no shared module state)
    - The app's store uses the FakeClock from the root conftest

Design Decisions:
    - httpx AsyncClient over ASGITransport: same client the routes see in production
    - Small request ceiling so the body-size guard is testable without megabytes
"""

import pytest
from httpx import ASGITransport, AsyncClient

from burnerlink.main import create_app


@pytest.fixture
def app(settings, store):
    settings.max_request_bytes = 64 * 1024
    return create_app(settings=settings, store=store)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def make_session(client):
    """Create a session over HTTP and return its id."""
    async def _make(code: str = "123456", device_id: str = "dev1") -> str:
        res = await client.post(
            "/sessions/create", json={"code": code, "deviceId": device_id},
        )
        assert res.status_code == 201, res.text
        return res.json()["sessionId"]
    return _make
