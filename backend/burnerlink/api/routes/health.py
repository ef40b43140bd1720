"""Health — liveness probe and the plain-text banner at /."""

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from burnerlink import __version__

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def banner():
    return "Burner Link API is live"


@router.get("/api/v1/health/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "burnerlink-relay",
        "version": __version__,
    }
