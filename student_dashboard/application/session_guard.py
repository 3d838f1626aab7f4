"""
Session guard.

Tracks the auth provider's session as a three-state machine
(unknown -> authenticated | unauthenticated) and keeps unauthenticated users
off protected routes. Owned explicitly and injected into every component
that gates on authentication.

Dependencies: student_dashboard.boundary.auth, student_dashboard.configs
System role: Authentication gate for views and data loaders
"""

import logging
from enum import Enum
from typing import Callable

from student_dashboard.boundary.auth.ports import (
    AuthProvider,
    AuthSession,
    AuthUser,
    Subscription,
)
from student_dashboard.configs.routes import RouteSettings
from student_dashboard.core.exceptions import AuthenticationRequiredError, RemoteError

logger = logging.getLogger(__name__)

SIGNED_OUT = "SIGNED_OUT"


class SessionState(str, Enum):
    """Session resolution state."""

    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


SessionListener = Callable[[SessionState, AuthUser | None], None]


class SessionGuard:
    """
    Observes the auth provider and gates routes on the session.

    While the state is UNKNOWN the guard reports `is_loading` and no data
    operation may run. Entering UNAUTHENTICATED on a protected route issues
    a redirect to the login route through `navigate`.
    """

    def __init__(
        self,
        provider: AuthProvider,
        routes: RouteSettings | None = None,
        navigate: Callable[[str], None] | None = None,
        current_route: str = "/",
    ) -> None:
        """
        Initialize the guard in the UNKNOWN state.

        Args:
            provider: Auth provider to observe
            routes: Login/register/public route configuration
            navigate: Called with the target path when a redirect is issued
            current_route: Route the owning view is currently showing
        """
        self._provider = provider
        self._routes = routes or RouteSettings()
        self._navigate = navigate
        self._current_route = current_route
        self._state = SessionState.UNKNOWN
        self._session: AuthSession | None = None
        self._subscription: Subscription | None = None
        self._listeners: list[SessionListener] = []
        self.last_redirect: str | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> AuthSession | None:
        return self._session

    @property
    def user(self) -> AuthUser | None:
        return self._session.user if self._session else None

    @property
    def is_loading(self) -> bool:
        """True while the session has not been resolved yet."""
        return self._state is SessionState.UNKNOWN

    @property
    def current_route(self) -> str:
        return self._current_route

    def is_public_route(self, route: str) -> bool:
        return route in self._routes.public_routes

    def require_user(self) -> AuthUser:
        """
        Return the signed-in user.

        Raises:
            AuthenticationRequiredError: If the session is unknown or absent
        """
        user = self.user
        if self._state is not SessionState.AUTHENTICATED or user is None:
            raise AuthenticationRequiredError(
                "You must be signed in to continue",
                redirect_to=self._routes.login,
            )
        return user

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a listener for state changes.

        Args:
            listener: Called with (state, user) after every transition

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> SessionState:
        """
        Subscribe to the provider's change stream and resolve the session.

        Returns:
            SessionState: State after resolution
        """
        if self._subscription is None:
            self._subscription = self._provider.on_auth_state_change(self._on_auth_event)

        try:
            session = await self._provider.get_session()
        except RemoteError as e:
            logger.warning("Session resolution failed", extra={"error": str(e)})
            session = None

        # The change stream may already have resolved the session
        if self._state is SessionState.UNKNOWN:
            self._apply(session)
        return self._state

    def stop(self) -> None:
        """Unsubscribe from the provider's change stream."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def set_route(self, route: str) -> str | None:
        """
        Record a navigation and enforce the route gate.

        Args:
            route: New current route

        Returns:
            Redirect target if the route is not allowed, else None
        """
        self._current_route = route
        if self._state is SessionState.UNAUTHENTICATED:
            return self._redirect_if_protected()
        return None

    def _on_auth_event(self, event: str, session: AuthSession | None) -> None:
        logger.debug("Auth event received", extra={"event": event})
        self._apply(None if event == SIGNED_OUT else session)

    def _apply(self, session: AuthSession | None) -> None:
        previous_state = self._state
        previous_user = self.user

        self._session = session
        self._state = (
            SessionState.AUTHENTICATED if session is not None else SessionState.UNAUTHENTICATED
        )

        if self._state is previous_state and self.user == previous_user:
            return

        logger.info(
            "Session state changed",
            extra={
                "from_state": previous_state.value,
                "to_state": self._state.value,
                "user_id": self.user.id if self.user else None,
            },
        )
        if self._state is SessionState.UNAUTHENTICATED:
            self._redirect_if_protected()

        for listener in list(self._listeners):
            listener(self._state, self.user)

    def _redirect_if_protected(self) -> str | None:
        if self.is_public_route(self._current_route):
            return None
        target = self._routes.login
        self.last_redirect = target
        logger.info(
            "Redirecting unauthenticated user",
            extra={"from_route": self._current_route, "to_route": target},
        )
        self._current_route = target
        if self._navigate is not None:
            self._navigate(target)
        return target
