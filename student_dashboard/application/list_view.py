"""
List view controller.

Holds the in-memory collection for one entity type and re-reads it in full
on every `refresh()`. No incremental or optimistic patching: collaborators
mutate through the gateway and then call `refresh()`.

Dependencies: asyncio, student_dashboard.application.session_guard
System role: Per-entity collection owner and refresh contract
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Generic, TypeVar

from student_dashboard.application.notifications import NotificationCenter
from student_dashboard.application.session_guard import SessionGuard, SessionState
from student_dashboard.boundary.auth.ports import AuthUser
from student_dashboard.core.exceptions import (
    AuthenticationRequiredError,
    DashboardError,
    RemoteError,
)

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")

Loader = Callable[[str], Awaitable[list[EntityT]]]


class ViewStatus(str, Enum):
    """Collection load status."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class ListViewController(Generic[EntityT]):
    """
    Owner of one entity collection.

    Concurrent `refresh()` calls are not coalesced; each completed fetch
    replaces the collection wholesale, so the latest completed fetch wins.
    Results that complete after `close()`, after a sign-out, or for a user
    who is no longer signed in are discarded.
    """

    def __init__(
        self,
        entity_label: str,
        loader: Loader,
        guard: SessionGuard,
        notifications: NotificationCenter | None = None,
    ) -> None:
        """
        Initialize the controller in the LOADING state.

        Args:
            entity_label: Plural label used in messages ("courses", "tasks")
            loader: Fetches the full collection for an owner id
            guard: Session guard gating every load
            notifications: Feed for transient error messages
        """
        self.entity_label = entity_label
        self._loader = loader
        self._guard = guard
        self._notifications = notifications
        self._items: list[EntityT] = []
        self._status = ViewStatus.LOADING
        self._error: DashboardError | None = None
        self._epoch = 0
        self._owner_id: str | None = None
        self._closed = False
        self._unsubscribe: Callable[[], None] | None = None
        self._scheduled: set[asyncio.Task] = set()

    @property
    def items(self) -> tuple[EntityT, ...]:
        """Snapshot of the current collection."""
        return tuple(self._items)

    @property
    def status(self) -> ViewStatus:
        return self._status

    @property
    def error(self) -> DashboardError | None:
        return self._error

    @property
    def is_empty(self) -> bool:
        """True only for a successfully loaded collection with no rows."""
        return self._status is ViewStatus.READY and not self._items

    @property
    def requires_authentication(self) -> bool:
        return isinstance(self._error, AuthenticationRequiredError)

    async def open(self) -> None:
        """Attach to the session guard and perform the initial load."""
        self._closed = False
        if self._unsubscribe is None:
            self._unsubscribe = self._guard.subscribe(self._on_session_change)
        await self.refresh()

    def close(self) -> None:
        """
        Detach from the session guard.

        Fetches still in flight run to completion but their results are dropped.
        """
        self._closed = True
        self._epoch += 1
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def wait_for_scheduled(self) -> None:
        """Wait for refreshes scheduled by session transitions."""
        while self._scheduled:
            await asyncio.gather(*list(self._scheduled), return_exceptions=True)

    async def refresh(self) -> None:
        """
        Re-read the full collection for the signed-in user.

        Issues no gateway call while the session is unresolved; surfaces an
        authentication error when there is no session.
        """
        if self._closed:
            return

        state = self._guard.state
        if state is SessionState.UNKNOWN:
            self._status = ViewStatus.LOADING
            return
        if state is SessionState.UNAUTHENTICATED or self._guard.user is None:
            self._require_authentication()
            return

        user_id = self._guard.user.id
        if user_id != self._owner_id:
            self._switch_owner(user_id)
        epoch = self._epoch
        self._status = ViewStatus.LOADING

        try:
            items = await self._loader(user_id)
        except RemoteError as e:
            if self._is_stale(epoch, user_id):
                return
            self._status = ViewStatus.ERROR
            self._error = e
            logger.warning(
                "Collection refresh failed",
                extra={"entity": self.entity_label, "error": str(e)},
            )
            if self._notifications is not None:
                self._notifications.from_error(e, f"Failed to load {self.entity_label}")
            return

        if self._is_stale(epoch, user_id):
            logger.debug("Discarding stale refresh result", extra={"entity": self.entity_label})
            return

        self._items = list(items)
        self._status = ViewStatus.READY
        self._error = None
        logger.debug(
            "Collection refreshed",
            extra={"entity": self.entity_label, "count": len(self._items)},
        )

    def _is_stale(self, epoch: int, user_id: str) -> bool:
        current = self._guard.user
        return (
            self._closed
            or epoch != self._epoch
            or current is None
            or current.id != user_id
        )

    def _switch_owner(self, user_id: str | None) -> None:
        # Invalidates every fetch started for the previous owner
        self._epoch += 1
        self._items = []
        self._owner_id = user_id

    def _require_authentication(self) -> None:
        self._epoch += 1
        self._items = []
        self._owner_id = None
        self._status = ViewStatus.ERROR
        self._error = AuthenticationRequiredError(
            f"Sign in to see your {self.entity_label}",
            redirect_to=self._guard_login_route(),
        )

    def _guard_login_route(self) -> str | None:
        try:
            self._guard.require_user()
        except AuthenticationRequiredError as e:
            return e.redirect_to
        return None

    def _on_session_change(self, state: SessionState, user: AuthUser | None) -> None:
        if self._closed:
            return
        if state is SessionState.UNAUTHENTICATED:
            self._require_authentication()
            return
        if state is SessionState.AUTHENTICATED and user is not None:
            if user.id != self._owner_id:
                self._switch_owner(user.id)
            self._schedule_refresh()

    def _schedule_refresh(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: the next explicit refresh() picks up the session
            return
        task = loop.create_task(self.refresh())
        self._scheduled.add(task)
        task.add_done_callback(self._scheduled.discard)
