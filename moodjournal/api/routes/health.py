from fastapi import APIRouter

from moodjournal import __version__
from moodjournal.core.tracing import is_tracing_enabled
from moodjournal.services.http_client import http_client_manager

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Liveness plus the state of the insight client pool."""
    return {
        "status": "healthy",
        "version": __version__,
        "insight_client_ready": http_client_manager.is_initialized,
        "tracing": is_tracing_enabled(),
    }
