"""
Tests for ListViewController.

Covers the session gate on loads, full-collection refresh, error and
empty states, and discarding of stale results.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from student_dashboard.application.list_view import ListViewController, ViewStatus
from student_dashboard.application.notifications import NotificationCenter
from student_dashboard.application.services import CourseService
from student_dashboard.application.session_guard import SessionGuard, SessionState
from student_dashboard.core.exceptions import AuthenticationRequiredError, RemoteError

USER_ID = "user-1"


@pytest.fixture
def notifications():
    return NotificationCenter()


def course_view(guard, store_client, notifications):
    return ListViewController(
        "courses",
        CourseService(store_client).list_courses,
        guard,
        notifications,
    )


class TestSessionGate:
    @pytest.mark.asyncio
    async def test_no_store_call_while_session_unknown_then_auth_error(
        self, signed_out_provider, store_client, fake_store, notifications
    ):
        """While unresolved nothing is fetched; once signed out the view reports auth."""
        # Arrange
        guard = SessionGuard(signed_out_provider)
        view = course_view(guard, store_client, notifications)

        # Act
        await view.open()

        # Assert
        assert guard.state is SessionState.UNKNOWN
        assert view.status is ViewStatus.LOADING
        assert fake_store.calls == []

        # Act
        await guard.start()

        # Assert
        assert fake_store.calls == []
        assert view.status is ViewStatus.ERROR
        assert isinstance(view.error, AuthenticationRequiredError)
        assert view.requires_authentication
        assert not view.is_empty
        assert view.items == ()

    @pytest.mark.asyncio
    async def test_resolving_session_schedules_initial_load(
        self, signed_in_provider, store_client, fake_store, notifications
    ):
        # Arrange
        fake_store.seed("courses", user_id=USER_ID, name="Algoritma")
        guard = SessionGuard(signed_in_provider)
        view = course_view(guard, store_client, notifications)
        await view.open()

        # Act
        await guard.start()
        await view.wait_for_scheduled()

        # Assert
        assert view.status is ViewStatus.READY
        assert [c.name for c in view.items] == ["Algoritma"]

    @pytest.mark.asyncio
    async def test_sign_out_clears_collection(
        self, signed_in_provider, store_client, fake_store, notifications
    ):
        # Arrange
        fake_store.seed("courses", user_id=USER_ID, name="Algoritma")
        guard = SessionGuard(signed_in_provider)
        await guard.start()
        view = course_view(guard, store_client, notifications)
        await view.open()
        assert len(view.items) == 1

        # Act
        signed_in_provider.emit("SIGNED_OUT", None)

        # Assert
        assert view.items == ()
        assert view.requires_authentication


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_is_idempotent(
        self, signed_in_provider, store_client, fake_store, notifications
    ):
        # Arrange
        fake_store.seed("courses", user_id=USER_ID, name="A")
        fake_store.seed("courses", user_id=USER_ID, name="B")
        guard = SessionGuard(signed_in_provider)
        await guard.start()
        view = course_view(guard, store_client, notifications)

        # Act
        await view.refresh()
        first = view.items
        await view.refresh()

        # Assert
        assert view.items == first
        assert [c.name for c in view.items] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_ready_with_no_rows_is_empty_not_error(
        self, signed_in_provider, store_client, notifications
    ):
        guard = SessionGuard(signed_in_provider)
        await guard.start()
        view = course_view(guard, store_client, notifications)

        await view.refresh()

        assert view.status is ViewStatus.READY
        assert view.is_empty
        assert view.error is None

    @pytest.mark.asyncio
    async def test_remote_error_keeps_previous_items_and_notifies(
        self, signed_in_provider, store_client, fake_store, notifications, store_error
    ):
        # Arrange
        fake_store.seed("courses", user_id=USER_ID, name="Kept")
        guard = SessionGuard(signed_in_provider)
        await guard.start()
        view = course_view(guard, store_client, notifications)
        await view.refresh()

        # Act
        fake_store.fail_next = store_error(message="connection reset")
        await view.refresh()

        # Assert
        assert view.status is ViewStatus.ERROR
        assert isinstance(view.error, RemoteError)
        assert [c.name for c in view.items] == ["Kept"]
        [notification] = notifications.recent
        assert notification.level == "error"
        assert notification.message == "connection reset"

    @pytest.mark.asyncio
    async def test_latest_completed_fetch_wins(self, signed_in_provider, notifications):
        # Arrange
        release_slow = asyncio.Event()

        async def loader(owner_id):
            if not release_slow.is_set():
                await release_slow.wait()
                return ["slow"]
            return ["fast"]

        guard = SessionGuard(signed_in_provider)
        await guard.start()
        view = ListViewController("courses", loader, guard, notifications)

        # Act
        slow = asyncio.create_task(view.refresh())
        await asyncio.sleep(0)
        release_slow.set()
        await view.refresh()
        await slow

        # Assert
        assert view.status is ViewStatus.READY
        assert view.items == ("slow",)


class TestStaleResults:
    @pytest.mark.asyncio
    async def test_result_after_close_is_discarded(self, signed_in_provider, notifications):
        # Arrange
        gate = asyncio.Event()

        async def loader(owner_id):
            await gate.wait()
            return ["late"]

        guard = SessionGuard(signed_in_provider)
        await guard.start()
        view = ListViewController("courses", loader, guard, notifications)
        pending = asyncio.create_task(view.refresh())
        await asyncio.sleep(0)

        # Act
        view.close()
        gate.set()
        await pending

        # Assert
        assert view.items == ()

    @pytest.mark.asyncio
    async def test_result_after_sign_out_is_discarded(self, signed_in_provider, notifications):
        # Arrange
        gate = asyncio.Event()
        calls = []

        async def loader(owner_id):
            calls.append(owner_id)
            # Only the second fetch stays in flight
            if len(calls) > 1:
                await gate.wait()
            return ["private"]

        guard = SessionGuard(signed_in_provider)
        await guard.start()
        view = ListViewController("courses", loader, guard, notifications)
        await view.open()
        pending = asyncio.create_task(view.refresh())
        await asyncio.sleep(0)

        # Act
        signed_in_provider.emit("SIGNED_OUT", None)
        gate.set()
        await pending

        # Assert
        assert view.items == ()
        assert view.requires_authentication

    @pytest.mark.asyncio
    async def test_first_load_for_previous_user_is_discarded(
        self, signed_in_provider, other_session, notifications
    ):
        """A fetch still running when the account switches never reaches the new user."""
        # Arrange
        gates = {USER_ID: asyncio.Event(), other_session.user.id: asyncio.Event()}

        async def loader(owner_id):
            await gates[owner_id].wait()
            return [f"{owner_id}-row"]

        guard = SessionGuard(signed_in_provider)
        await guard.start()
        view = ListViewController("courses", loader, guard, notifications)
        first_load = asyncio.create_task(view.open())
        await asyncio.sleep(0)

        # Act
        signed_in_provider.emit("SIGNED_IN", other_session)
        await asyncio.sleep(0)
        gates[other_session.user.id].set()
        await view.wait_for_scheduled()
        gates[USER_ID].set()
        await first_load

        # Assert
        assert guard.user.id == other_session.user.id
        assert view.items == ("user-2-row",)
        assert view.status is ViewStatus.READY

    @pytest.mark.asyncio
    async def test_close_detaches_from_guard(self, signed_in_provider, notifications):
        guard = SessionGuard(signed_in_provider)
        loader = AsyncMock(return_value=[])
        view = ListViewController("courses", loader, guard, notifications)
        await view.open()

        view.close()
        await guard.start()
        await view.wait_for_scheduled()

        loader.assert_not_awaited()
