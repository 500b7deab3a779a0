"""
Health Check Router
Service liveness and document store connectivity
"""
from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends

from cost_manager.core.config import settings
from cost_manager.core.errors import StorageError
from cost_manager.db.base import DocumentStore
from cost_manager.db.store import get_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns API status.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/status")
def storage_status(store: DocumentStore = Depends(get_store)):
    """
    Check that the document store answers.
    """
    storage = {
        "backend": settings.STORAGE_BACKEND,
        "connected": False,
        "error": None
    }
    try:
        store.ping()
        storage["connected"] = True
    except StorageError as e:
        storage["error"] = e.message
        logger.error(f"Storage check failed: {e.message}")

    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "storage": storage,
        "overall_status": "healthy" if storage["connected"] else "degraded"
    }
