"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SessionId, MessageId, DeviceId wrap opaque strings — no structural meaning
    - MessageKind has exactly two members; anything else coerces to TEXT
    - DeviceTier defaults to FREE; the core never upgrades a device

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SessionId = NewType("SessionId", str)
MessageId = NewType("MessageId", str)
DeviceId = NewType("DeviceId", str)

UNKNOWN_SENDER = DeviceId("unknown")

MAX_PARTICIPANTS: int = 2
CODE_PATTERN: str = r"[0-9]{6}"


# ─── Enums ───────────────────────────────────────────────────────

class DeviceTier(str, Enum):
    """Device classification — controls session expiry and image quota."""
    FREE = "free"
    PRO = "pro"


class MessageKind(str, Enum):
    """Envelope kind — only images are rate-limited."""
    TEXT = "text"
    IMAGE = "image"

    @classmethod
    def coerce(cls, value: object) -> "MessageKind":
        """Map any caller-supplied value to a kind. Unknown values become TEXT."""
        if value == cls.IMAGE.value or value is cls.IMAGE:
            return cls.IMAGE
        return cls.TEXT


class BurnReason(str, Enum):
    """Why a session was burned — surfaced in logs only."""
    ENDED = "ended"
    EXPIRED = "expired"
    STALE = "stale"
