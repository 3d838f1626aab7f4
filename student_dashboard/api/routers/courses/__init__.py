"""
Courses router package.

Exports the router for the signed-in user's course endpoints.
"""

from .courses_router import router

__all__ = ["router"]
