"""Error Hierarchy — typed, categorized exceptions for every relay failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) are recoverable by restarting the handshake; internal errors are critical
    - to_response() produces the REST envelope used by every error response
    - No ciphertext, nonce or internal state appears in user-facing messages

Design Decisions:
    - Single hierarchy with BurnerLinkError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CAPACITY = "capacity"
    RATE_LIMIT = "rate_limit"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: str | None = None
    device_id: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class BurnerLinkError(Exception):
    """Base exception for all relay errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "session_id": self.context.session_id,
                    "device_id": self.context.device_id,
                    "field": self.context.field,
                },
            }
        }


# ─── Domain Errors (4xx) ────────────────────────────────────────

class InvalidInputError(BurnerLinkError):
    """Malformed code, device id, session id or payload shape."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        context = context or ErrorContext()
        context.field = field
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class SessionNotFoundError(BurnerLinkError):
    """Session is unknown, already burned, or past its deadline."""
    def __init__(self, session_id: str | None = None, context: ErrorContext | None = None):
        context = context or ErrorContext()
        context.session_id = session_id
        super().__init__(
            "Session not found or inactive",
            "SESSION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class CapacityExceededError(BurnerLinkError):
    """A third device tried to enter a two-device session."""
    def __init__(self, session_id: str, device_id: str, context: ErrorContext | None = None):
        context = context or ErrorContext()
        context.session_id = session_id
        context.device_id = device_id
        super().__init__(
            "Session already has two devices connected.",
            "CAPACITY_EXCEEDED", ErrorCategory.CAPACITY,
            ErrorSeverity.WARNING, context, 403,
        )


class QuotaExceededError(BurnerLinkError):
    """Free-tier device reached its daily image limit."""
    def __init__(self, device_id: str, limit: int, context: ErrorContext | None = None):
        context = context or ErrorContext()
        context.device_id = device_id
        super().__init__(
            f"Daily image limit reached ({limit} per day on the free tier)",
            "QUOTA_EXCEEDED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, context, 403,
        )
        self.limit = limit


class PayloadTooLargeError(BurnerLinkError):
    """Request body exceeds the configured ceiling."""
    def __init__(self, limit_bytes: int, context: ErrorContext | None = None):
        super().__init__(
            f"Request body exceeds {limit_bytes} bytes",
            "PAYLOAD_TOO_LARGE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 413,
        )
        self.limit_bytes = limit_bytes


# ─── Internal Errors (5xx) ──────────────────────────────────────

class InternalFaultError(BurnerLinkError):
    """Session state violated an invariant. Should be unreachable."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )

    def to_response(self) -> dict:
        """Internal details stay in the logs, never in the body."""
        return {
            "error": {
                "code": self.code,
                "message": "An unexpected error occurred",
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }
