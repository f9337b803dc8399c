"""
Health check endpoints.

- /: liveness probe kept for the existing frontend and uptime monitors
- /health: basic liveness check (always returns 200)
- /health/db: store connectivity check
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from brincapark.api.dependencies import get_store
from brincapark.api.errors import STORE_ERRORS
from brincapark.infrastructure.db.engine import Store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Backend BRINCAPARK - funcionando"


@router.get("/health")
async def health_check():
    """
    Basic liveness probe.

    Returns 200 OK if the application is running.
    """
    return {"status": "ok", "service": "brincapark-api"}


@router.get("/health/db")
async def health_check_db(store: Store = Depends(get_store)):
    """
    Store connectivity health check.

    Returns 503 Service Unavailable if the database is down.
    """
    try:
        await store.ping()
    except STORE_ERRORS as e:
        logger.error("Database health check failed", exc_info=e)
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "component": "database",
                "error": "Database connection failed",
            },
        )
    return {"status": "healthy", "component": "database"}
