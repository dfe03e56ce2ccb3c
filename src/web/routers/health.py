"""
Health Check Endpoints

Provides:
1. /health      - Service status plus whether the default tax tables load
2. /health/live - Simple liveness probe
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from calculator.errors import TaxEngineError
from config.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Application start time for uptime calculation
_start_time = datetime.now(timezone.utc)


@router.get("/health/live")
def liveness():
    return {"status": "alive"}


@router.get("/health")
def health():
    """Report whether the default year's tables build cleanly."""
    from web.routers.calculations import get_engine

    settings = get_settings()
    uptime = (datetime.now(timezone.utc) - _start_time).total_seconds()

    try:
        tables = get_engine(settings.default_tax_year).tables
    except TaxEngineError as exc:
        logger.error(f"Health check failed loading tax tables: {exc.message}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "version": settings.version,
                "uptime_seconds": round(uptime, 1),
                "tax_tables": "unavailable",
            },
        )

    return {
        "status": "healthy",
        "version": settings.version,
        "environment": settings.environment,
        "uptime_seconds": round(uptime, 1),
        "tax_year": tables.tax_year,
        "states": tables.supported_states(),
    }
