"""Code Routes — server-generated rendezvous codes."""

from fastapi import APIRouter

from burnerlink.core.identifiers import generate_code
from burnerlink.schemas.relay import CodeResponse

router = APIRouter(tags=["codes"])


@router.post("/generate-code", response_model=CodeResponse)
async def create_code():
    """Return a random 6-digit code. Nothing is reserved; create_session does the rest."""
    return CodeResponse(code=generate_code())
