"""Session Store — the single owner of session, device and metrics state.

Invariants:
    - One RLock guards sessions, devices and metrics; every public method holds it
    - Session ids are never reused (fresh UUID4 per create)
    - Free-tier sessions get expires_at = created_at + free_session_lifetime; pro sessions none
    - Join resolves a shared code to the OLDEST active session (dict insertion order)
    - An expired session is burned the moment an operation touches it, then reported as not found
    - status() never raises and never mutates

Design Decisions:
    - Explicit store handle instead of module-level state: each app and each test owns one
    - No background sweeper: expiry and staleness are checked lazily on touch, so an
      untouched expired session still counts in active_session_count()
    - Heartbeat and message ledger live in their own modules and run under locked()
"""

import logging
import re
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Iterable, Iterator

from burnerlink.core.clock import Clock, utc_now
from burnerlink.core.device_registry import DeviceRecord, DeviceRegistry
from burnerlink.core.domain_types import (
    CODE_PATTERN, BurnReason, DeviceId, DeviceTier, SessionId,
)
from burnerlink.core.errors import (
    CapacityExceededError, InternalFaultError, InvalidInputError, SessionNotFoundError,
)
from burnerlink.core.identifiers import new_id
from burnerlink.core.participants import ParticipantCapacityError
from burnerlink.core.session_state import Session, SessionStatus
from burnerlink.core.usage_metrics import UsageMetrics

logger = logging.getLogger(__name__)

_CODE_RE = re.compile(CODE_PATTERN)


def require_text(value: object, field: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidInputError(f"Missing or invalid {field}", field=field)
    return value


class SessionStore:
    """In-memory session table plus device registry and usage counters."""

    def __init__(
        self,
        *,
        offline_timeout: timedelta = timedelta(seconds=20),
        free_session_lifetime: timedelta = timedelta(minutes=10),
        free_daily_image_quota: int = 5,
        quota_window: timedelta = timedelta(hours=24),
        pro_device_ids: Iterable[str] = (),
        clock: Clock = utc_now,
    ):
        self.offline_timeout = offline_timeout
        self.free_session_lifetime = free_session_lifetime
        self.free_daily_image_quota = free_daily_image_quota
        self.clock = clock
        self.devices = DeviceRegistry(
            quota_window=quota_window, pro_device_ids=pro_device_ids,
        )
        self.metrics = UsageMetrics()
        self._sessions: dict[SessionId, Session] = {}
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[datetime]:
        """Hold the store lock; yields the current time read under it."""
        with self._lock:
            yield self.clock()

    # ─── Lifecycle ─────────────────────────────────────────────

    def create_session(self, code: str, device_id: str) -> Session:
        """Open a session with the creator as its first participant."""
        code = require_text(code, "code")
        if not _CODE_RE.fullmatch(code):
            raise InvalidInputError("Code must be a 6-digit number", field="code")
        device_id = DeviceId(require_text(device_id, "deviceId"))

        with self.locked() as now:
            device = self.devices.get_or_create(device_id, now)
            session = Session(
                id=SessionId(new_id()),
                code=code,
                created_at=now,
                expires_at=self._deadline_for(device, now),
            )
            session.participants.add(device_id)
            session.touch(device_id, now)
            self._sessions[session.id] = session
            self.metrics.record_session_created(device_id)

        logger.info(
            "Session created",
            extra={"session_id": session.id, "device_id": device_id},
        )
        return session

    def join_session(self, code: str, device_id: str) -> Session:
        """Join the oldest active session holding this code."""
        code = require_text(code, "code")
        device_id = DeviceId(require_text(device_id, "deviceId"))

        with self.locked() as now:
            self.metrics.record_device(device_id)
            session = self._find_active_by_code(code)
            if session is None:
                raise SessionNotFoundError()
            if session.is_expired(now):
                self._burn(session, BurnReason.EXPIRED)
                raise SessionNotFoundError(session.id)

            if device_id not in session.participants:
                self.admit(session, device_id)
                session.touch(device_id, now)

        logger.info(
            "Session joined",
            extra={"session_id": session.id, "device_id": device_id},
        )
        return session

    def end_session(self, session_id: str) -> None:
        """Burn a session. Ending an already-burned session is a no-op."""
        with self._lock:
            session = self._sessions.get(SessionId(session_id))
            if session is None:
                raise SessionNotFoundError(session_id)
            if session.active:
                self._burn(session, BurnReason.ENDED)

    def status(self, session_id: str) -> SessionStatus:
        with self._lock:
            session = self._sessions.get(SessionId(session_id))
            if session is None:
                return SessionStatus(active=False, participant_count=0)
            return session.status()

    def exists(self, session_id: str) -> bool:
        with self._lock:
            return SessionId(session_id) in self._sessions

    # ─── Shared helpers (caller holds the lock) ────────────────

    def get_live_session(self, session_id: str, now: datetime) -> Session:
        """Resolve an active, unexpired session or raise SessionNotFoundError."""
        session = self._sessions.get(SessionId(session_id))
        if session is None or not session.active:
            raise SessionNotFoundError(session_id)
        if session.is_expired(now):
            self._burn(session, BurnReason.EXPIRED)
            raise SessionNotFoundError(session_id)
        return session

    def burn(self, session: Session, reason: BurnReason) -> None:
        with self._lock:
            self._burn(session, reason)

    def admit(self, session: Session, device_id: DeviceId) -> None:
        """Add device_id to participants, translating a full set to CapacityExceededError."""
        try:
            session.participants.add(device_id)
        except ParticipantCapacityError:
            raise CapacityExceededError(session.id, device_id) from None

    # ─── Metrics ───────────────────────────────────────────────

    def active_session_count(self) -> int:
        with self._lock:
            return sum(1 for s in self._sessions.values() if s.active)

    def record_camera_click(self, device_id: str | None = None) -> None:
        with self._lock:
            self.metrics.record_camera_click(device_id)

    def usage_snapshot(self) -> dict:
        with self._lock:
            return self.metrics.snapshot(self.active_session_count())

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    # ─── Internals ─────────────────────────────────────────────

    def _deadline_for(self, device: DeviceRecord, now: datetime) -> datetime | None:
        if device.tier is DeviceTier.PRO:
            return None
        return now + self.free_session_lifetime

    def _find_active_by_code(self, code: str) -> Session | None:
        for session in self._sessions.values():
            if session.active and session.code == code:
                return session
        return None

    def _burn(self, session: Session, reason: BurnReason) -> None:
        session.burn()
        if session.participants or session.messages or session.last_seen:
            raise InternalFaultError(f"Burn left residual state in {session.id}")
        logger.info(
            "Session burned",
            extra={"session_id": session.id, "reason": reason.value},
        )
