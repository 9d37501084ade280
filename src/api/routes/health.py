"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_session_registry, get_store
from api.sessions import SessionRegistry
from services.study_store import StudyStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(
    store: StudyStore = Depends(get_store),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Health check endpoint with storage status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    try:
        healthy = store.ping()
        message = "Connection successful" if healthy else "Storage not writable or unreachable"
    except Exception as e:
        healthy = False
        message = f"Connection error: {str(e)[:200]}"

    read_only = store.read_only_slots
    if healthy and read_only:
        storage_status = "degraded"
        message = "Some stored slots could not be read and are read-only"
    else:
        storage_status = "healthy" if healthy else "unhealthy"

    health_status["services"]["storage"] = {
        "status": storage_status,
        "backend": store.backend,
        "message": message,
        "read_only_slots": read_only,
    }
    health_status["services"]["sessions"] = {
        "review": registry.review_count(),
        "conversation": registry.conversation_count(),
    }

    if storage_status == "degraded":
        health_status["status"] = "degraded"
        logger.warning("Storage degraded", extra={"read_only_slots": read_only})

    if not healthy:
        health_status["status"] = "unhealthy"
        logger.warning("Health check failed", extra={"storage": message})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=health_status,
        )
    return health_status
