"""Health check endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health():
    """Liveness check for the hosting platform."""
    return {"status": "ok"}
