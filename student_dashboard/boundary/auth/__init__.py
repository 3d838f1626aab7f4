"""
Authentication boundary: provider port and Supabase adapter.
"""

from student_dashboard.boundary.auth.ports import (
    AuthProvider,
    AuthSession,
    AuthUser,
    Subscription,
)
from student_dashboard.boundary.auth.supabase_auth import SupabaseAuthProvider

__all__ = [
    "AuthProvider",
    "AuthSession",
    "AuthUser",
    "SupabaseAuthProvider",
    "Subscription",
]
