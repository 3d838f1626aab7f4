"""
Auth router package.
"""

from .auth_router import router

__all__ = ["router"]
