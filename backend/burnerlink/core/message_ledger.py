"""Message Ledger — append-only, session-scoped envelope list.

Invariants:
    - Checks run in a fixed order: live session (404), payload shape (400), image quota (403)
    - Append happens under the store lock, so a burn can never race an append
    - Only structural presence of ciphertext and nonce is checked; content is opaque
    - The stored Message is returned as-is (echo, not a transformed view)
    - Free-tier devices may send at most free_daily_image_quota images per window

Design Decisions:
    - Quota is counted on the sender's device record, including the "unknown" sentinel
    - Pro devices bypass the limit but their counter still advances
"""

import logging
from typing import Any, Mapping

from burnerlink.core.domain_types import UNKNOWN_SENDER, DeviceId, MessageId, MessageKind
from burnerlink.core.errors import InvalidInputError, QuotaExceededError
from burnerlink.core.identifiers import new_id
from burnerlink.core.session_state import EncryptedPayload, Message
from burnerlink.core.session_store import SessionStore

logger = logging.getLogger(__name__)


def validate_payload(payload: Any) -> EncryptedPayload:
    """Require a mapping with non-empty ciphertext and nonce strings."""
    if isinstance(payload, EncryptedPayload):
        payload = {"ciphertext": payload.ciphertext, "nonce": payload.nonce}
    if not isinstance(payload, Mapping):
        raise InvalidInputError("Missing encrypted payload", field="payload")
    ciphertext = payload.get("ciphertext")
    nonce = payload.get("nonce")
    if not ciphertext or not nonce or not isinstance(ciphertext, str) or not isinstance(nonce, str):
        raise InvalidInputError("Missing encrypted payload", field="payload")
    return EncryptedPayload(ciphertext=ciphertext, nonce=nonce)


def post_message(
    store: SessionStore,
    session_id: str,
    sender_id: str | None,
    kind: object,
    payload: Any,
    file_name: str | None = None,
) -> Message:
    """Validate, rate-limit and append one envelope to a live session."""
    with store.locked() as now:
        session = store.get_live_session(session_id, now)
        encrypted = validate_payload(payload)
        sender = DeviceId(sender_id) if sender_id else UNKNOWN_SENDER
        message_kind = MessageKind.coerce(kind)

        if message_kind is MessageKind.IMAGE:
            device = store.devices.get_or_create(sender, now)
            limit = store.free_daily_image_quota
            if device.is_free and device.daily_image_count >= limit:
                raise QuotaExceededError(sender, limit)
            device.daily_image_count += 1

        message = Message(
            id=MessageId(new_id()),
            sender_id=sender,
            kind=message_kind,
            payload=encrypted,
            file_name=(file_name or None) if message_kind is MessageKind.IMAGE else None,
        )
        session.messages.append(message)

    logger.info(
        "Message stored",
        extra={
            "session_id": session.id, "message_id": message.id,
            "kind": message.kind.value,
        },
    )
    return message


def list_messages(store: SessionStore, session_id: str) -> list[Message]:
    """All envelopes of a live session in append order."""
    with store.locked() as now:
        session = store.get_live_session(session_id, now)
        return list(session.messages)
