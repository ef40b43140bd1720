"""Message Routes — post and list encrypted envelopes."""

from fastapi import APIRouter, Depends, status

from burnerlink.api.dependencies import get_store
from burnerlink.core.message_ledger import list_messages, post_message
from burnerlink.core.session_store import SessionStore
from burnerlink.schemas.relay import MessageResponse, PostMessageRequest

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post(
    "", response_model=MessageResponse, status_code=status.HTTP_201_CREATED,
)
async def create_message(
    body: PostMessageRequest, store: SessionStore = Depends(get_store),
):
    """Store one envelope and echo it back."""
    message = post_message(
        store,
        session_id=body.session_id,
        sender_id=body.sender_id,
        kind=body.kind,
        payload=body.payload,
        file_name=body.file_name,
    )
    return MessageResponse.from_message(message)


@router.get("/{session_id}", response_model=list[MessageResponse])
async def get_messages(
    session_id: str, store: SessionStore = Depends(get_store),
):
    return [MessageResponse.from_message(m) for m in list_messages(store, session_id)]
