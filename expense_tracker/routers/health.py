"""
Health Check Router
Simple health check endpoint
"""
from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from expense_tracker.core.config import settings
from expense_tracker.db.storage import KeyValueStore, get_store

router = APIRouter()


@router.get("/health")
async def health_check(store: KeyValueStore = Depends(get_store)):
    """
    Health check endpoint.
    Returns API status and whether the local store file exists yet.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "storage": {
            "path": str(store.path),
            "exists": store.path.exists(),
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
