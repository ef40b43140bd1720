"""Session Routes — create, join, end, status and heartbeat.

Invariants:
    - Each route calls exactly one core operation on the injected store
    - status never fails: unknown sessions answer 404 with the inactive default body
    - Domain errors propagate to the global BurnerLinkError handler
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from burnerlink.api.dependencies import get_store
from burnerlink.core.heartbeat import record_heartbeat
from burnerlink.core.session_store import SessionStore
from burnerlink.schemas.relay import (
    CodeDeviceRequest, EndSessionRequest, HeartbeatRequest, HeartbeatResponse,
    OkResponse, SessionIdResponse, StatusResponse,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post(
    "/create", response_model=SessionIdResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    body: CodeDeviceRequest, store: SessionStore = Depends(get_store),
):
    """Open a session for a 6-digit code. The caller becomes the first participant."""
    session = store.create_session(body.code, body.device_id)
    return SessionIdResponse(session_id=session.id)


@router.post("/join", response_model=SessionIdResponse)
async def join_session(
    body: CodeDeviceRequest, store: SessionStore = Depends(get_store),
):
    """Join by code. Re-joining as an existing participant is a reconnect."""
    session = store.join_session(body.code, body.device_id)
    return SessionIdResponse(session_id=session.id)


@router.post("/end", response_model=OkResponse)
async def end_session(
    body: EndSessionRequest, store: SessionStore = Depends(get_store),
):
    """Burn the session and all its messages."""
    store.end_session(body.session_id)
    return OkResponse()


@router.get("/status/{session_id}", response_model=StatusResponse)
async def session_status(
    session_id: str, store: SessionStore = Depends(get_store),
):
    body = StatusResponse.from_status(store.status(session_id))
    if not store.exists(session_id):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=body.model_dump(by_alias=True),
        )
    return body


@router.post("/heartbeat", response_model=HeartbeatResponse)
async def heartbeat(
    body: HeartbeatRequest, store: SessionStore = Depends(get_store),
):
    """Liveness ping. ended=true means the peer went silent and the session burned."""
    result = record_heartbeat(store, body.session_id, body.device_id)
    return HeartbeatResponse(ended=result.ended)
