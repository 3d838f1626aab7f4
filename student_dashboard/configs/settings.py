"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from student_dashboard.configs.base import BaseSettings
from student_dashboard.configs.routes import RouteSettings
from student_dashboard.configs.supabase import SupabaseSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    routes: RouteSettings = Field(default_factory=RouteSettings)

    @property
    def email_redirect_url(self) -> str:
        """Post-registration redirect target."""
        return f"{self.site_url.rstrip('/')}{self.routes.home}"


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from student_dashboard.configs import get_settings
        settings = get_settings()
    """
    return Settings()
