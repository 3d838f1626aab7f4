"""
Route configuration settings.

Login/register routes are public; every other route requires a session.

Dependencies: pydantic, pydantic_settings
System role: Navigation targets for the session guard
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from student_dashboard.configs.base import BaseSettings


class RouteSettings(BaseSettings):
    """Navigable route configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ROUTE_",
        case_sensitive=False,
        extra="ignore",
    )

    login: str = Field(default="/auth/v1/login", description="Login route")
    register_route: str = Field(
        default="/auth/v1/register",
        validation_alias=AliasChoices("route_register", "register_route"),
        description="Registration route",
    )
    home: str = Field(default="/dashboard/default", description="Landing route after sign-up")

    @property
    def public_routes(self) -> frozenset[str]:
        """Routes reachable without a session."""
        return frozenset({self.login, self.register_route})
