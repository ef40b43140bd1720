"""Relay Schemas — Pydantic models for the session, message and metrics endpoints.

Invariants:
    - Requests are lenient on content (empty strings pass) so core/ owns the
      InvalidInput / NotFound ordering; wrong JSON types still fail with 400
    - PostMessageRequest accepts the legacy names `type` and `encrypted`
    - MessageResponse mirrors the stored Message field for field

Design Decisions:
    - alias_generator=to_camel with populate_by_name: tests and core callers can
      use snake_case, clients see camelCase
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from burnerlink.core.session_state import Message, SessionStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests -----------------------------------------------------------------

class CodeDeviceRequest(CamelModel):
    """Body of /sessions/create and /sessions/join."""
    code: str
    device_id: str


class EndSessionRequest(CamelModel):
    session_id: str = ""


class HeartbeatRequest(CamelModel):
    session_id: str
    device_id: str


class PostMessageRequest(CamelModel):
    """Body of POST /messages. payload stays raw JSON; core validates its shape."""
    session_id: str = ""
    sender_id: str | None = None
    kind: Any = Field(None, validation_alias=AliasChoices("kind", "type"))
    payload: Any = Field(
        None, validation_alias=AliasChoices("payload", "encrypted"),
    )
    file_name: str | None = Field(
        None, max_length=255, validation_alias=AliasChoices("fileName", "file_name"),
    )


class CameraClickRequest(CamelModel):
    device_id: str | None = None


# --- Responses ----------------------------------------------------------------

class SessionIdResponse(CamelModel):
    session_id: str


class OkResponse(CamelModel):
    ok: bool = True


class HeartbeatResponse(CamelModel):
    ok: bool = True
    ended: bool


class StatusResponse(CamelModel):
    active: bool
    participant_count: int

    @classmethod
    def from_status(cls, status: SessionStatus) -> "StatusResponse":
        return cls(active=status.active, participant_count=status.participant_count)


class PayloadModel(CamelModel):
    ciphertext: str
    nonce: str


class MessageResponse(CamelModel):
    id: str
    sender_id: str
    kind: str
    payload: PayloadModel
    file_name: str | None = None

    @classmethod
    def from_message(cls, message: Message) -> "MessageResponse":
        return cls(
            id=message.id,
            sender_id=message.sender_id,
            kind=message.kind.value,
            payload=PayloadModel(
                ciphertext=message.payload.ciphertext,
                nonce=message.payload.nonce,
            ),
            file_name=message.file_name,
        )


class CodeResponse(CamelModel):
    code: str


class UsageStatsResponse(CamelModel):
    camera_clicks: int
    sessions_created: int
    active_sessions: int
    approximate_users: int
