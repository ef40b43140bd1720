"""Heartbeat Monitor — liveness pings and stale-peer detection.

Invariants:
    - find_stale_peer is PURE: returns the stale device id, does NOT mutate
    - Staleness is only judged when last_seen has >= 2 entries
    - A peer is stale when its age strictly exceeds the offline timeout
    - A heartbeat may admit a device without going through join, but never past capacity

Design Decisions:
    - Poll-driven only: this is the sole mechanism that notices a silent peer
    - Heartbeat leniency is kept apart from join's code lookup; both share
      SessionStore.admit so the two-device ceiling has one implementation
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Mapping

from burnerlink.core.domain_types import BurnReason, DeviceId
from burnerlink.core.session_store import SessionStore, require_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeartbeatResult:
    ended: bool


def find_stale_peer(
    last_seen: Mapping[DeviceId, datetime],
    device_id: DeviceId,
    now: datetime,
    timeout: timedelta,
) -> DeviceId | None:
    """Return the first other device silent for longer than timeout. Pure."""
    if len(last_seen) < 2:
        return None
    for peer, seen_at in last_seen.items():
        if peer != device_id and now - seen_at > timeout:
            return peer
    return None


def record_heartbeat(
    store: SessionStore, session_id: str, device_id: str,
) -> HeartbeatResult:
    """Refresh device_id's liveness; burn the session if its peer went silent."""
    session_id = require_text(session_id, "sessionId")
    device_id = DeviceId(require_text(device_id, "deviceId"))

    with store.locked() as now:
        session = store.get_live_session(session_id, now)
        if device_id not in session.participants:
            store.admit(session, device_id)
        session.touch(device_id, now)

        stale = find_stale_peer(
            session.last_seen, device_id, now, store.offline_timeout,
        )
        if stale is None:
            return HeartbeatResult(ended=False)

        logger.info(
            "Peer went silent",
            extra={"session_id": session.id, "device_id": stale},
        )
        store.burn(session, BurnReason.STALE)
        return HeartbeatResult(ended=True)
