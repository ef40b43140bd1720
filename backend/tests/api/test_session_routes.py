"""Session Routes — HTTP mapping of create/join/end/status/heartbeat.

Invariants under test:
    - create → 201 {sessionId}; malformed code or missing deviceId → 400
    - join → 200 {sessionId}; unknown code 404; third device 403
    - end → {ok: true}, idempotent; unknown session 404
    - status never errors; unknown session → 404 with inactive default body
    - heartbeat → {ok, ended}; stale peer ends the session
"""

import pytest


async def test_create_returns_201_with_session_id(client):
    res = await client.post(
        "/sessions/create", json={"code": "123456", "deviceId": "dev1"},
    )
    assert res.status_code == 201
    assert res.json()["sessionId"]


@pytest.mark.parametrize("body", [
    {"code": "12345", "deviceId": "dev1"},
    {"code": "abcdef", "deviceId": "dev1"},
    {"code": "123456", "deviceId": ""},
    {"code": "123456"},
    {"deviceId": "dev1"},
    {"code": 123456, "deviceId": "dev1"},
])
async def test_create_rejects_bad_input(client, body):
    res = await client.post("/sessions/create", json=body)
    assert res.status_code == 400
    assert res.json()["error"]["code"] in ("INVALID_INPUT", "VALIDATION_ERROR")


async def test_create_rejects_non_json_body(client):
    res = await client.post(
        "/sessions/create", content=b"not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400


async def test_join_returns_same_session(client, make_session):
    session_id = await make_session()
    res = await client.post(
        "/sessions/join", json={"code": "123456", "deviceId": "dev2"},
    )
    assert res.status_code == 200
    assert res.json() == {"sessionId": session_id}


async def test_join_unknown_code_is_404(client):
    res = await client.post(
        "/sessions/join", json={"code": "000000", "deviceId": "dev2"},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "SESSION_NOT_FOUND"


async def test_join_missing_device_is_400(client, make_session):
    await make_session()
    res = await client.post("/sessions/join", json={"code": "123456", "deviceId": ""})
    assert res.status_code == 400


async def test_third_device_is_403(client, make_session):
    await make_session()
    await client.post("/sessions/join", json={"code": "123456", "deviceId": "dev2"})
    res = await client.post(
        "/sessions/join", json={"code": "123456", "deviceId": "dev3"},
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "CAPACITY_EXCEEDED"


async def test_join_after_expiry_is_404(client, make_session, clock):
    await make_session()
    clock.advance(minutes=10, seconds=1)
    res = await client.post(
        "/sessions/join", json={"code": "123456", "deviceId": "dev2"},
    )
    assert res.status_code == 404


async def test_end_returns_ok_and_is_idempotent(client, make_session):
    session_id = await make_session()
    for _ in range(2):
        res = await client.post("/sessions/end", json={"sessionId": session_id})
        assert res.status_code == 200
        assert res.json() == {"ok": True}


async def test_end_unknown_session_is_404(client):
    res = await client.post("/sessions/end", json={"sessionId": "nope"})
    assert res.status_code == 404


async def test_end_without_session_id_is_404(client):
    res = await client.post("/sessions/end", json={})
    assert res.status_code == 404


async def test_status_of_live_session(client, make_session):
    session_id = await make_session()
    await client.post("/sessions/join", json={"code": "123456", "deviceId": "dev2"})
    res = await client.get(f"/sessions/status/{session_id}")
    assert res.status_code == 200
    assert res.json() == {"active": True, "participantCount": 2}


async def test_status_of_unknown_session_is_404_shaped_default(client):
    res = await client.get("/sessions/status/missing")
    assert res.status_code == 404
    assert res.json() == {"active": False, "participantCount": 0}


async def test_status_after_end(client, make_session):
    session_id = await make_session()
    await client.post("/sessions/end", json={"sessionId": session_id})
    res = await client.get(f"/sessions/status/{session_id}")
    assert res.status_code == 200
    assert res.json() == {"active": False, "participantCount": 0}


async def test_heartbeat_ok(client, make_session):
    session_id = await make_session()
    res = await client.post(
        "/sessions/heartbeat", json={"sessionId": session_id, "deviceId": "dev1"},
    )
    assert res.status_code == 200
    assert res.json() == {"ok": True, "ended": False}


async def test_heartbeat_with_silent_peer_ends_session(client, make_session, clock):
    session_id = await make_session()
    await client.post("/sessions/join", json={"code": "123456", "deviceId": "dev2"})
    clock.advance(seconds=21)
    res = await client.post(
        "/sessions/heartbeat", json={"sessionId": session_id, "deviceId": "dev1"},
    )
    assert res.json() == {"ok": True, "ended": True}
    status = await client.get(f"/sessions/status/{session_id}")
    assert status.json() == {"active": False, "participantCount": 0}


async def test_heartbeat_on_ended_session_is_404(client, make_session):
    session_id = await make_session()
    await client.post("/sessions/end", json={"sessionId": session_id})
    res = await client.post(
        "/sessions/heartbeat", json={"sessionId": session_id, "deviceId": "dev1"},
    )
    assert res.status_code == 404


@pytest.mark.parametrize("body", [
    {"deviceId": "dev1"}, {"sessionId": "abc"}, {"sessionId": "", "deviceId": "dev1"},
])
async def test_heartbeat_bad_input_is_400(client, body):
    res = await client.post("/sessions/heartbeat", json=body)
    assert res.status_code == 400


async def test_heartbeat_from_third_device_is_403(client, make_session):
    session_id = await make_session()
    await client.post("/sessions/join", json={"code": "123456", "deviceId": "dev2"})
    res = await client.post(
        "/sessions/heartbeat", json={"sessionId": session_id, "deviceId": "dev3"},
    )
    assert res.status_code == 403
