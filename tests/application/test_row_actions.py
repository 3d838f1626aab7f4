"""
Tests for the row action surface and the notification feed.
"""

from datetime import datetime, timezone

import pytest

from student_dashboard.application.list_view import ListViewController
from student_dashboard.application.mutation_drawer import DrawerState
from student_dashboard.application.notifications import NotificationCenter
from student_dashboard.application.row_actions import CourseRowActions, TaskRowActions
from student_dashboard.application.services import CourseService, TaskService
from student_dashboard.application.session_guard import SessionGuard
from student_dashboard.core.exceptions import RemoteError
from student_dashboard.core.validators import parse_course_row, parse_task_row
from student_dashboard.models.course import Course
from student_dashboard.models.task import Task

USER_ID = "user-1"
CREATED = datetime(2025, 1, 2, 8, 0, tzinfo=timezone.utc)


def make_course(**overrides) -> Course:
    values = {"id": "c1", "user_id": USER_ID, "name": "Algoritma", "created_at": CREATED}
    values.update(overrides)
    return Course.model_validate(values)


def make_task(**overrides) -> Task:
    values = {
        "id": "t1",
        "user_id": USER_ID,
        "course_id": "c1",
        "title": "Laporan",
        "deadline": datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc),
        "created_at": CREATED,
    }
    values.update(overrides)
    return Task.model_validate(values)


class TestDetailViews:
    def test_course_detail_marks_absent_values(self, store_client):
        actions = CourseRowActions(CourseService(store_client), None, NotificationCenter())

        detail = actions.view_detail(make_course(semester=3))

        assert detail.get("Course Name") == "Algoritma"
        assert detail.get("Semester") == "Semester 3"
        assert detail.get("Lecturer") == "-"
        assert detail.get("SKS") == "-"
        assert detail.get("Added") == "02 Jan 2025"

    def test_task_detail_shows_course_and_default_status(self, store_client):
        actions = TaskRowActions(TaskService(store_client), None, NotificationCenter())

        detail = actions.view_detail(make_task(status=None, course_name="Algoritma"))

        assert detail.get("Course") == "Algoritma"
        assert detail.get("Status") == "Pending"
        assert detail.get("Deadline") == "01 Mar 2025 10:00 UTC"
        assert detail.get("Updated") == "-"

    def test_orphan_task_detail_has_no_course(self, store_client):
        actions = TaskRowActions(TaskService(store_client), None, NotificationCenter())

        assert actions.view_detail(make_task()).get("Course") == "-"


class TestRowMutations:
    @pytest.mark.asyncio
    async def test_edit_then_submit_refreshes_the_list(
        self, signed_in_provider, store_client, fake_store
    ):
        # Arrange
        row = fake_store.seed("courses", user_id=USER_ID, name="Old")
        guard = SessionGuard(signed_in_provider)
        await guard.start()
        service = CourseService(store_client)
        notifications = NotificationCenter()
        view = ListViewController("courses", service.list_courses, guard, notifications)
        await view.refresh()
        actions = CourseRowActions(service, view, notifications)

        # Act
        drawer = actions.edit(parse_course_row(row))
        drawer.set_field("name", "New")
        await drawer.submit()

        # Assert
        assert drawer.state is DrawerState.CLOSED
        assert [c.name for c in view.items] == ["New"]

    @pytest.mark.asyncio
    async def test_confirmed_delete_removes_row_from_list(
        self, signed_in_provider, store_client, fake_store
    ):
        # Arrange
        course = fake_store.seed("courses", user_id=USER_ID, name="Algoritma")
        row = fake_store.seed(
            "tasks",
            user_id=USER_ID,
            course_id=course["id"],
            title="Quiz",
            deadline="2025-03-01T10:00:00+00:00",
        )
        guard = SessionGuard(signed_in_provider)
        await guard.start()
        service = TaskService(store_client)
        notifications = NotificationCenter()
        view = ListViewController("tasks", service.list_tasks, guard, notifications)
        await view.refresh()
        actions = TaskRowActions(service, view, notifications)

        # Act
        dialog = actions.request_delete(parse_task_row({**row, "courses": None}))
        deleted = await dialog.confirm()

        # Assert
        assert deleted is True
        assert view.items == ()
        assert view.is_empty
        assert '"Quiz"' in dialog.prompt


class TestNotificationCenter:
    def test_feed_is_bounded(self):
        center = NotificationCenter(max_items=2)

        center.success("one")
        center.success("two")
        center.error("three")

        assert [n.message for n in center.recent] == ["two", "three"]

    def test_from_error_uses_error_message_and_details(self):
        center = NotificationCenter()

        notification = center.from_error(RemoteError("timeout", code="network_error"), "fallback")

        assert notification.level == "error"
        assert notification.message == "timeout"
        assert notification.details["code"] == "network_error"

    def test_drain_empties_feed(self):
        center = NotificationCenter()
        center.success("saved")

        assert [n.message for n in center.drain()] == ["saved"]
        assert center.recent == []
