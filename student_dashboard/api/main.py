"""
FastAPI application with assembled routers.

Initializes the FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, student_dashboard.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware

from student_dashboard.api.deps.dependencies import get_client_cache, get_settings_dependency
from student_dashboard.api.routers import (
    auth_router,
    courses_router,
    health_router,
    tasks_router,
)
from student_dashboard.api.routers.error_handling import to_http_exception
from student_dashboard.core.exceptions import DashboardError
from student_dashboard.observability import configure_logging
from student_dashboard.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and closes the shared client on shutdown.
    """
    settings = get_settings_dependency()
    configure_logging(settings.log_level)

    if not settings.supabase.is_configured:
        logger.warning("Supabase is not configured; store and auth calls will fail")
    logger.info("Student dashboard API started", extra={"environment": settings.environment})

    yield

    await get_client_cache().clear()
    logger.info("Shared Supabase client released")


async def dashboard_error_handler(request: Request, exc: DashboardError):
    """Translate domain errors raised outside endpoint bodies (e.g. in dependencies)."""
    return await http_exception_handler(request, to_http_exception(exc))


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Student Dashboard API",
        description="Courses and tasks for signed-in students, backed by Supabase",
        version="0.1.0",
        lifespan=lifespan,
    )

    settings = get_settings_dependency()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.site_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Added last so it runs first and the ID is bound for request logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(DashboardError, dashboard_error_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(courses_router, prefix="/api/v1")
    app.include_router(tasks_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "student_dashboard.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
