"""
Tasks router package.

Exports the router for the signed-in user's task endpoints.
"""

from .tasks_router import router

__all__ = ["router"]
