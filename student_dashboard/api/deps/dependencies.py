"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: student_dashboard.configs, student_dashboard.application, student_dashboard.boundary
System role: DI container for service injection
"""

from functools import lru_cache
from typing import Any, AsyncIterator

from fastapi import Depends, Header
from supabase import AsyncClient

from student_dashboard.application.services import CourseService, TaskService
from student_dashboard.boundary.auth import AuthProvider, AuthUser, SupabaseAuthProvider
from student_dashboard.boundary.store import close_store_client, create_store_client
from student_dashboard.configs import Settings, get_settings
from student_dashboard.core.exceptions import AuthenticationRequiredError

BEARER_PREFIX = "bearer "


class ClientCache:
    """Container for the shared anon-key Supabase client."""

    def __init__(self) -> None:
        self._anon_client: AsyncClient | None = None

    async def anon_client(self, settings: Settings) -> AsyncClient:
        """Get the cached anon-key client, creating it on first use."""
        if self._anon_client is None:
            self._anon_client = await create_store_client(settings.supabase)
        return self._anon_client

    async def clear(self) -> None:
        """Close and drop the cached client."""
        client, self._anon_client = self._anon_client, None
        if client is not None:
            await close_store_client(client)


# Global client cache
_client_cache = ClientCache()


def get_client_cache() -> ClientCache:
    """Get client cache singleton."""
    return _client_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_bearer_token(authorization: str | None = Header(None)) -> str | None:
    """
    Extract the Supabase access token from the Authorization header.

    Returns:
        str | None: Token, or None when the header is missing or not a bearer token
    """
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


async def get_store_client(
    token: str | None = Depends(get_bearer_token),
    settings: Settings = Depends(get_settings_dependency),
) -> AsyncIterator[AsyncClient]:
    """
    Get a per-request Supabase client carrying the caller's token.

    Table calls made with it run under the caller's row-level security.
    The client's HTTP session is closed once the request completes.

    Yields:
        AsyncClient: Request-scoped client
    """
    client = await create_store_client(settings.supabase, access_token=token)
    try:
        yield client
    finally:
        await close_store_client(client)


async def get_auth_provider(
    settings: Settings = Depends(get_settings_dependency),
) -> AuthProvider:
    """
    Get the auth provider backed by the shared anon-key client.

    Returns:
        AuthProvider: Supabase auth adapter
    """
    client = await get_client_cache().anon_client(settings)
    return SupabaseAuthProvider(client, email_redirect_to=settings.email_redirect_url)


async def get_sign_in_provider(
    settings: Settings = Depends(get_settings_dependency),
) -> AsyncIterator[AuthProvider]:
    """
    Get an auth provider over a client that lives for one request.

    Sign-in and sign-up keep the issued session in the client's memory, so
    they never run on the shared anon-key client.

    Yields:
        AuthProvider: Supabase auth adapter over a request-scoped client
    """
    client = await create_store_client(settings.supabase)
    try:
        yield SupabaseAuthProvider(client, email_redirect_to=settings.email_redirect_url)
    finally:
        await close_store_client(client)


async def get_current_user(
    token: str | None = Depends(get_bearer_token),
    provider: AuthProvider = Depends(get_auth_provider),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthUser:
    """
    Resolve the signed-in user from the bearer token.

    Raises:
        AuthenticationRequiredError: If the token is missing, expired or invalid
    """
    user = await provider.get_user(token) if token else None
    if user is None:
        raise AuthenticationRequiredError(
            "Authentication required",
            redirect_to=settings.routes.login,
        )
    return user


def get_course_service(
    client: Any = Depends(get_store_client),
    user: AuthUser = Depends(get_current_user),
) -> CourseService:
    """
    Get course service instance for an authenticated caller.

    Args:
        client: Request-scoped Supabase client (injected via Depends)
        user: Signed-in user; resolving it rejects anonymous callers first

    Returns:
        CourseService: Course service instance
    """
    return CourseService(client)


def get_task_service(
    client: Any = Depends(get_store_client),
    user: AuthUser = Depends(get_current_user),
) -> TaskService:
    """
    Get task service instance for an authenticated caller.

    Returns:
        TaskService: Task service instance
    """
    return TaskService(client)
