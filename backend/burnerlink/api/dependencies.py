"""API Dependencies — store construction and per-request store lookup.

Invariants:
    - Exactly one SessionStore per app instance, held on app.state.store
    - Routes obtain the store only through get_store (overridable in tests)
"""

from fastapi import Request

from burnerlink.config import Settings
from burnerlink.core.clock import Clock, utc_now
from burnerlink.core.session_store import SessionStore


def build_store(settings: Settings, clock: Clock = utc_now) -> SessionStore:
    """Create a SessionStore configured from settings."""
    return SessionStore(
        offline_timeout=settings.offline_timeout,
        free_session_lifetime=settings.free_session_lifetime,
        free_daily_image_quota=settings.free_daily_image_quota,
        quota_window=settings.quota_window,
        pro_device_ids=settings.pro_device_ids,
        clock=clock,
    )


def get_store(request: Request) -> SessionStore:
    return request.app.state.store
