"""Health and readiness check routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config import settings
from errors import FetchError
from routes.carbon import get_dataset_cache
from services.cache import DatasetCache

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check, no external calls."""
    return {"status": "ok", "service": "carbon-intensity-api", "commit": settings.git_sha}


@router.get("/health")
async def health(cache: DatasetCache = Depends(get_dataset_cache)):
    """Deep health check: the dataset must be loadable (fresh or stale)."""
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        await cache.get_dataset()
    except FetchError as e:
        logger.error("Health check failed, no dataset available: %s", e)
        return JSONResponse(
            {
                "status": "ERROR",
                "timestamp": timestamp,
                "total_records": 0,
                "last_updated": None,
                "error": str(e),
            },
            status_code=503,
        )

    return {
        "status": "OK",
        "timestamp": timestamp,
        "total_records": cache.record_count,
        "last_updated": cache.last_updated.isoformat(),
    }
