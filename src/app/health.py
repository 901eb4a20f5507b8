"""
Health Check Routes
"""
from __future__ import annotations

from time import perf_counter

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shared.api.dependencies import get_container
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health(container=Depends(get_container)):
    t0 = perf_counter()
    try:
        await container.database.ping()
    except (SQLAlchemyError, OSError) as e:
        logger.error("health_db_unavailable", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"ok": False, "checks": {"db": "SELECT 1 failed"}, "error": type(e).__name__},
        )
    dt_ms = int((perf_counter() - t0) * 1000)
    relay = container.relay
    relay_state = "disabled" if relay is None else ("up" if relay.healthy else "down")
    if relay_state == "down":
        logger.warning("health_relay_down")
    return {"ok": True, "checks": {"db_select_1_ms": dt_ms, "relay": relay_state}}
