"""
Health check API endpoints.

Routes: GET /health, GET /health/store

Dependencies: student_dashboard.configs
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from student_dashboard.api.deps.dependencies import get_settings_dependency
from student_dashboard.configs import Settings


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/store", response_model=HealthResponse)
async def health_check_store(
    settings: Settings = Depends(get_settings_dependency),
) -> HealthResponse:
    """Report whether the hosted store connection is configured."""
    if not settings.supabase.is_configured:
        return HealthResponse(status="degraded", message="Supabase URL or anon key not set")
    return HealthResponse(status="healthy", message="Supabase configured")
