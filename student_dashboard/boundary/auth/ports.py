"""
Auth provider port.

The session guard and the HTTP layer depend on this protocol only; the
Supabase adapter implements it.

Dependencies: None (pure typing)
System role: Authentication provider boundary
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Protocol


@dataclass(frozen=True)
class AuthUser:
    """Authenticated user as seen by the dashboard."""

    id: str
    email: str | None = None
    full_name: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """Active session issued by the provider."""

    access_token: str
    user: AuthUser
    refresh_token: str | None = None
    expires_at: int | None = None


AuthStateCallback = Callable[[str, AuthSession | None], None]


class Subscription(Protocol):
    """Handle returned by `on_auth_state_change`."""

    def unsubscribe(self) -> None: ...


class AuthProvider(Protocol):
    """Hosted authentication provider operations used by the dashboard."""

    def get_session(self) -> Awaitable[AuthSession | None]: ...

    def on_auth_state_change(self, callback: AuthStateCallback) -> Subscription: ...

    def sign_in_with_password(self, email: str, password: str) -> Awaitable[AuthSession]: ...

    def sign_up(
        self,
        email: str,
        password: str,
        full_name: str | None = None,
    ) -> Awaitable[AuthUser | None]: ...

    def sign_out(self, access_token: str | None = None) -> Awaitable[None]: ...

    def get_user(self, access_token: str) -> Awaitable[AuthUser | None]: ...

