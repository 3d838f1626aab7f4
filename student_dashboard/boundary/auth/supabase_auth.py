"""
Supabase auth adapter.

Implements the AuthProvider port on top of `client.auth` (GoTrue). Provider
failures surface as RemoteError; an expired or invalid token is reported as
"no user" rather than an error.

Dependencies: supabase, student_dashboard.boundary.auth.ports
System role: Authentication provider adapter
"""

import logging
from typing import Any

import httpx
from supabase import AuthError

from student_dashboard.boundary.auth.ports import (
    AuthSession,
    AuthStateCallback,
    AuthUser,
    Subscription,
)
from student_dashboard.core.exceptions import RemoteError

logger = logging.getLogger(__name__)

_UNAUTHORIZED_STATUSES = {401, 403}


def _to_user(user: Any) -> AuthUser | None:
    if user is None:
        return None
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthUser(
        id=str(user.id),
        email=getattr(user, "email", None),
        full_name=metadata.get("full_name"),
    )


def _to_session(session: Any) -> AuthSession | None:
    if session is None or getattr(session, "user", None) is None:
        return None
    return AuthSession(
        access_token=session.access_token,
        refresh_token=getattr(session, "refresh_token", None),
        expires_at=getattr(session, "expires_at", None),
        user=_to_user(session.user),
    )


def _remote_error(e: Exception, operation: str) -> RemoteError:
    return RemoteError(
        getattr(e, "message", None) or str(e) or "Auth request failed",
        code=getattr(e, "code", None) or type(e).__name__,
        operation=operation,
        details={"status": getattr(e, "status", None)},
    )


class SupabaseAuthProvider:
    """AuthProvider backed by a Supabase async client."""

    def __init__(self, client: Any, email_redirect_to: str) -> None:
        """
        Initialize the adapter.

        Args:
            client: Supabase AsyncClient
            email_redirect_to: Target for the confirmation link sent at sign-up
        """
        self._client = client
        self._email_redirect_to = email_redirect_to

    async def get_session(self) -> AuthSession | None:
        """Resolve the current session, None when signed out."""
        try:
            session = await self._client.auth.get_session()
        except (AuthError, httpx.HTTPError) as e:
            raise _remote_error(e, "get_session") from e
        return _to_session(session)

    def on_auth_state_change(self, callback: AuthStateCallback) -> Subscription:
        """
        Subscribe to the provider's change stream.

        Args:
            callback: Called with (event, session) on every auth change

        Returns:
            Subscription: Handle whose `unsubscribe()` ends the stream
        """

        def _forward(event: Any, session: Any) -> None:
            callback(str(getattr(event, "value", event)), _to_session(session))

        return self._client.auth.on_auth_state_change(_forward)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """
        Sign in with email and password.

        Raises:
            RemoteError: If credentials are rejected or the call fails
        """
        try:
            response = await self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except (AuthError, httpx.HTTPError) as e:
            raise _remote_error(e, "sign_in") from e

        session = _to_session(response.session)
        if session is None:
            raise RemoteError("Sign-in returned no session", code="no_session", operation="sign_in")
        logger.info("User signed in", extra={"user_id": session.user.id})
        return session

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: str | None = None,
    ) -> AuthUser | None:
        """
        Register a new account.

        The confirmation email links back to the dashboard home.

        Raises:
            RemoteError: If the provider rejects the registration
        """
        try:
            response = await self._client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {
                        "email_redirect_to": self._email_redirect_to,
                        "data": {"full_name": full_name},
                    },
                }
            )
        except (AuthError, httpx.HTTPError) as e:
            raise _remote_error(e, "sign_up") from e

        user = _to_user(response.user)
        logger.info("User registered", extra={"user_id": user.id if user else None})
        return user

    async def sign_out(self, access_token: str | None = None) -> None:
        """
        Sign out.

        Args:
            access_token: Revoke this token's session; defaults to the client's own session
        """
        try:
            if access_token:
                await self._client.auth.admin.sign_out(access_token)
            else:
                await self._client.auth.sign_out()
        except (AuthError, httpx.HTTPError) as e:
            raise _remote_error(e, "sign_out") from e

    async def get_user(self, access_token: str) -> AuthUser | None:
        """
        Resolve the user owning an access token.

        Returns:
            AuthUser, or None when the token is missing, expired or invalid

        Raises:
            RemoteError: For provider failures other than an unauthorized token
        """
        if not access_token:
            return None
        try:
            response = await self._client.auth.get_user(access_token)
        except AuthError as e:
            if getattr(e, "status", None) in _UNAUTHORIZED_STATUSES:
                return None
            raise _remote_error(e, "get_user") from e
        except httpx.HTTPError as e:
            raise _remote_error(e, "get_user") from e
        if response is None:
            return None
        return _to_user(response.user)
