"""Session State — in-memory records for one rendezvous and its envelopes.

Invariants:
    - participants never exceeds 2 (enforced by ParticipantSet)
    - active == False implies participants, last_seen and messages are all empty
    - expires_at is fixed at creation and never extended
    - Messages are immutable once stored; the ledger only appends or clears

Design Decisions:
    - Dataclasses with no IO: the store owns locking and time, these only hold state
    - burn() clears everything in one call so no caller can half-burn a session
"""

from dataclasses import dataclass, field
from datetime import datetime

from burnerlink.core.domain_types import DeviceId, MessageId, MessageKind, SessionId
from burnerlink.core.participants import ParticipantSet


@dataclass(frozen=True)
class EncryptedPayload:
    """Opaque ciphertext + nonce pair. Never decrypted or inspected."""
    ciphertext: str
    nonce: str


@dataclass(frozen=True)
class Message:
    """One stored envelope. Echoed back verbatim on post and list."""
    id: MessageId
    sender_id: DeviceId
    kind: MessageKind
    payload: EncryptedPayload
    file_name: str | None = None


@dataclass(frozen=True)
class SessionStatus:
    """Best-effort probe result."""
    active: bool
    participant_count: int


@dataclass
class Session:
    """Per-session state — mutated only by SessionStore under its lock."""

    id: SessionId
    code: str
    created_at: datetime
    expires_at: datetime | None = None
    active: bool = True
    participants: ParticipantSet = field(default_factory=ParticipantSet)
    last_seen: dict[DeviceId, datetime] = field(default_factory=dict)
    messages: list[Message] = field(default_factory=list)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def touch(self, device_id: DeviceId, now: datetime) -> None:
        self.last_seen[device_id] = now

    def burn(self) -> None:
        """Mark inactive and drop participants, liveness and messages. Idempotent."""
        self.active = False
        self.participants.clear()
        self.last_seen.clear()
        self.messages.clear()

    def status(self) -> SessionStatus:
        return SessionStatus(
            active=self.active, participant_count=len(self.participants),
        )
