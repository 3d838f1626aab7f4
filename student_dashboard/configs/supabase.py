"""
Supabase configuration settings.

Connection parameters for the hosted auth provider and table store.

Dependencies: pydantic, pydantic_settings
System role: Backend-as-a-service connection configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from student_dashboard.configs.base import BaseSettings


class SupabaseSettings(BaseSettings):
    """Supabase project configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SUPABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="http://localhost:54321", description="Supabase project URL")
    anon_key: str = Field(default="", description="Supabase anon (public) API key")
    postgrest_timeout: int = Field(default=30, description="PostgREST client timeout in seconds")

    @property
    def is_configured(self) -> bool:
        """Whether an API key has been provided."""
        return bool(self.anon_key.strip())
