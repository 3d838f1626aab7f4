"""API routers."""

from .auth import router as auth_router
from .courses import router as courses_router
from .health import router as health_router
from .tasks import router as tasks_router

__all__ = [
    "auth_router",
    "courses_router",
    "health_router",
    "tasks_router",
]
