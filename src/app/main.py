"""
Course Lifecycle & Billing API

Run with ``uvicorn app.main:create_app --factory``.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from app.container import Container, build_container
from app.health import router as health_router
from billing.api.routes import invoices_router, pricing_router
from courses.api.routes import availability_router, courses_router
from realtime.api import router as realtime_router
from shared.api.middleware import RequestContextMiddleware
from shared.config import get_settings
from shared.exceptions import register_exception_handlers
from shared.infrastructure.observability.logger import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(container: Optional[Container] = None) -> FastAPI:
    settings = container.settings if container is not None else get_settings()
    configure_logging(settings.log_level, json_logs=settings.json_logs, sql_echo=settings.database_echo)
    container = container or build_container(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await container.start()
        logger.info("application_started", environment=settings.environment)
        try:
            yield
        finally:
            await container.stop()
            logger.info("application_stopped")

    app = FastAPI(
        title="Course Lifecycle & Billing API",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(RequestContextMiddleware)

    app.include_router(health_router)
    app.include_router(courses_router, prefix="/courses", tags=["Courses"])
    app.include_router(availability_router, prefix="/availability", tags=["Availability"])
    app.include_router(pricing_router, prefix="/pricing-rules", tags=["Pricing"])
    app.include_router(invoices_router, prefix="/invoices", tags=["Invoices"])
    app.include_router(realtime_router, tags=["Realtime"])

    # {code, message, details?, correlation_id?}
    register_exception_handlers(app)

    return app


def run() -> None:
    """Console entry point."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=settings.environment == "local")
