"""Metrics Routes — camera-click counter and usage stats.

Invariants:
    - Counters are process-lifetime only
    - activeSessions counts lazily expired sessions that nothing has touched yet
"""

from fastapi import APIRouter, Depends

from burnerlink.api.dependencies import get_store
from burnerlink.core.session_store import SessionStore
from burnerlink.schemas.relay import CameraClickRequest, OkResponse, UsageStatsResponse

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.post("/camera-click", response_model=OkResponse)
async def camera_click(
    body: CameraClickRequest | None = None,
    store: SessionStore = Depends(get_store),
):
    """Record that a user tapped the camera icon in the app."""
    store.record_camera_click(body.device_id if body else None)
    return OkResponse()


@router.get("/stats", response_model=UsageStatsResponse)
async def usage_stats(store: SessionStore = Depends(get_store)):
    return UsageStatsResponse.model_validate(store.usage_snapshot())
