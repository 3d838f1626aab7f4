"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_auth_provider,
    get_bearer_token,
    get_course_service,
    get_current_user,
    get_settings_dependency,
    get_sign_in_provider,
    get_store_client,
    get_task_service,
)

__all__ = [
    "get_auth_provider",
    "get_bearer_token",
    "get_course_service",
    "get_current_user",
    "get_settings_dependency",
    "get_sign_in_provider",
    "get_store_client",
    "get_task_service",
]
