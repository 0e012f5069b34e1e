"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from fastapi import APIRouter, Depends, HTTPException

from semita.config.storage import get_store
from semita.core.errors import StorageError
from semita.core.settings import settings
from semita.storage.base import DocumentStore
from semita.utils.timestamps import utc_now


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": utc_now().isoformat()
    }


@router.get("/db")
async def database_health(store: DocumentStore = Depends(get_store)):
    """
    Storage connectivity check.
    Runs a cheap scan against the configured backend.
    """
    try:
        info = store.ping()
    except StorageError as e:
        raise HTTPException(
            status_code=503,
            detail=f"Database connection failed: {str(e)}"
        )
    return {
        "status": "healthy",
        "database": info["backend"],
        "connected": True,
        "timestamp": utc_now().isoformat()
    }
