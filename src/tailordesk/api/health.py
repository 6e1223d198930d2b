"""
Health check endpoint for monitoring and orchestration.

Reports uptime and database connectivity. Always answers 200 so load
balancers keep routing while a dependency is degraded.
"""

import time
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from tailordesk.core.db import get_db

router = APIRouter(tags=["health"])


def get_uptime_seconds(started_at: datetime | None) -> int:
    """Calculate seconds since app start."""
    if started_at is None:
        return 0
    return int((datetime.now() - started_at).total_seconds())


async def check_database(db: AsyncSession) -> dict[str, Any]:
    """
    Run a trivial query against the database.

    Returns: {"status": "ok"|"down", "response_time_ms": N, "error": str (if down)}
    """
    start = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        return {
            "status": "down",
            "response_time_ms": int((time.perf_counter() - start) * 1000),
            "error": type(e).__name__,
        }
    return {
        "status": "ok",
        "response_time_ms": int((time.perf_counter() - start) * 1000),
    }


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health_check(request: Request, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """
    Example response (degraded):
        {
            "status": "degraded",
            "uptime_seconds": 3600,
            "checks": {"database": {"status": "down", "response_time_ms": 1000,
                                    "error": "OperationalError"}}
        }
    """
    db_check = await check_database(db)

    return JSONResponse(
        content={
            "status": "ok" if db_check["status"] == "ok" else "degraded",
            "uptime_seconds": get_uptime_seconds(getattr(request.app.state, "started_at", None)),
            "checks": {"database": db_check},
        },
        status_code=status.HTTP_200_OK,
    )
