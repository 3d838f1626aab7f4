"""
Mutation drawers.

Bounded form surfaces for creating and editing courses and tasks, plus the
single-step delete confirmation. Lifecycle:

    closed -> open -> validating -> submitting -> closed      (success)
                          |              |
                          +-> open       +-> open             (error kept)

Input is checked locally before any gateway call. On success the drawer
publishes a notification, awaits the list refresh, then closes.

Dependencies: student_dashboard.application.services, student_dashboard.core
System role: Create/edit/delete flows
"""

import logging
from datetime import timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Mapping, TypeVar

from pydantic import BaseModel

from student_dashboard.application.notifications import NotificationCenter
from student_dashboard.application.services.course_service import CourseService
from student_dashboard.application.services.task_service import TaskService
from student_dashboard.application.session_guard import SessionGuard
from student_dashboard.core.exceptions import (
    AuthenticationRequiredError,
    DashboardError,
    RemoteError,
    ValidationError,
)
from student_dashboard.core.validators import validate_course_fields, validate_task_fields
from student_dashboard.models.course import Course
from student_dashboard.models.task import DEFAULT_TASK_STATUS, Task

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")

Refresh = Callable[[], Awaitable[None]]

DEADLINE_INPUT_FORMAT = "%Y-%m-%dT%H:%M"

COURSE_FORM_FIELDS = ("name", "lecturer", "semester", "sks", "description", "category")
TASK_FORM_FIELDS = ("title", "description", "deadline", "status")


class DrawerState(str, Enum):
    """Drawer lifecycle state."""

    CLOSED = "closed"
    OPEN = "open"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


class MutationDrawer(Generic[EntityT]):
    """
    Base drawer: form values, lifecycle and the submit pipeline.

    Subclasses provide `_validate` (local check, raises ValidationError) and
    `_dispatch` (gateway call).
    """

    form_fields: tuple[str, ...] = ()
    success_message = "Saved"
    failure_message = "Save failed"

    def __init__(
        self,
        notifications: NotificationCenter,
        on_refresh: Refresh | None = None,
    ) -> None:
        """
        Initialize a closed drawer.

        Args:
            notifications: Feed for success and error messages
            on_refresh: Awaited after a successful submission, before closing
        """
        self._notifications = notifications
        self._on_refresh = on_refresh
        self._state = DrawerState.CLOSED
        self._values: dict[str, Any] = {}
        self._error: DashboardError | None = None

    @property
    def state(self) -> DrawerState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is not DrawerState.CLOSED

    @property
    def values(self) -> dict[str, Any]:
        """Copy of the current form values."""
        return dict(self._values)

    @property
    def error(self) -> DashboardError | None:
        """Error surfaced by the last failed submission."""
        return self._error

    def open(self, values: Mapping[str, Any] | None = None) -> None:
        """
        Open the drawer, blank or prefilled.

        Args:
            values: Initial form values; unknown keys are ignored
        """
        self._values = {name: None for name in self.form_fields}
        for name, value in (values or {}).items():
            if name in self._values:
                self._values[name] = value
        self._error = None
        self._state = DrawerState.OPEN

    def set_field(self, name: str, value: Any) -> None:
        """
        Record one field edit.

        Raises:
            ValidationError: If the field is not part of this form
        """
        self._ensure_open()
        if name not in self._values:
            raise ValidationError(f"Unknown form field: {name}", field=name)
        self._values[name] = value

    def close(self) -> None:
        self._state = DrawerState.CLOSED
        self._values = {}
        self._error = None

    async def submit(self) -> EntityT | None:
        """
        Validate locally, then dispatch.

        Returns:
            The saved entity, or None when the submission failed and the
            drawer stayed open with `error` set

        Raises:
            RuntimeError: If the drawer is closed or a submission is in flight
        """
        self._ensure_open()
        if self._state is not DrawerState.OPEN:
            raise RuntimeError("Submission already in progress")
        self._error = None

        self._state = DrawerState.VALIDATING
        try:
            payload = self._validate(self._values)
        except ValidationError as e:
            logger.debug("Form rejected locally", extra={"field": e.field})
            return self._fail(e, e.message)

        self._state = DrawerState.SUBMITTING
        try:
            result = await self._dispatch(payload)
        except (AuthenticationRequiredError, RemoteError) as e:
            return self._fail(e, self.failure_message)
        except Exception:
            self._state = DrawerState.OPEN
            raise

        self._notifications.success(self.success_message)
        if self._on_refresh is not None:
            await self._on_refresh()
        self.close()
        return result

    def _fail(self, error: DashboardError, fallback: str) -> None:
        self._error = error
        self._state = DrawerState.OPEN
        self._notifications.from_error(error, fallback)
        return None

    def _ensure_open(self) -> None:
        if self._state is DrawerState.CLOSED:
            raise RuntimeError("Drawer is not open")

    def _validate(self, values: Mapping[str, Any]) -> BaseModel:
        raise NotImplementedError

    async def _dispatch(self, payload: BaseModel) -> EntityT:
        raise NotImplementedError


class CourseEditDrawer(MutationDrawer[Course]):
    """Edits one course; submits the complete editable field set."""

    form_fields = COURSE_FORM_FIELDS
    success_message = "Course updated successfully"
    failure_message = "Failed to update course"

    def __init__(
        self,
        service: CourseService,
        notifications: NotificationCenter,
        on_refresh: Refresh | None = None,
    ) -> None:
        super().__init__(notifications, on_refresh)
        self._service = service
        self.course: Course | None = None

    def open_for(self, course: Course) -> None:
        """Open prefilled from an existing course."""
        self.course = course
        self.open(course.model_dump(include=set(COURSE_FORM_FIELDS)))

    def _validate(self, values):
        return validate_course_fields(values)

    async def _dispatch(self, payload):
        if self.course is None:
            raise RuntimeError("Edit drawer opened without a course")
        return await self._service.update_course(self.course.user_id, self.course.id, payload)


class CourseCreateDrawer(MutationDrawer[Course]):
    """Creates a course owned by the signed-in user."""

    form_fields = COURSE_FORM_FIELDS
    success_message = "Course added successfully"
    failure_message = "Failed to add course"

    def __init__(
        self,
        service: CourseService,
        guard: SessionGuard,
        notifications: NotificationCenter,
        on_refresh: Refresh | None = None,
    ) -> None:
        super().__init__(notifications, on_refresh)
        self._service = service
        self._guard = guard

    def _validate(self, values):
        return validate_course_fields(values)

    async def _dispatch(self, payload):
        user = self._guard.require_user()
        return await self._service.create_course(user.id, payload)


def _deadline_input(task: Task) -> str:
    return task.deadline.astimezone(timezone.utc).strftime(DEADLINE_INPUT_FORMAT)


class TaskEditDrawer(MutationDrawer[Task]):
    """Edits one task; the deadline is prefilled in datetime-local shape."""

    form_fields = TASK_FORM_FIELDS
    success_message = "Task updated successfully"
    failure_message = "Failed to update task"

    def __init__(
        self,
        service: TaskService,
        notifications: NotificationCenter,
        on_refresh: Refresh | None = None,
    ) -> None:
        super().__init__(notifications, on_refresh)
        self._service = service
        self.task: Task | None = None

    def open_for(self, task: Task) -> None:
        """Open prefilled from an existing task."""
        self.task = task
        self.open(
            {
                "title": task.title,
                "description": task.description,
                "deadline": _deadline_input(task),
                "status": task.status or DEFAULT_TASK_STATUS,
            }
        )

    def _validate(self, values):
        fields = validate_task_fields(values)
        if fields.status is None:
            fields = fields.model_copy(update={"status": DEFAULT_TASK_STATUS})
        return fields

    async def _dispatch(self, payload):
        if self.task is None:
            raise RuntimeError("Edit drawer opened without a task")
        return await self._service.update_task(self.task.user_id, self.task.id, payload)


class TaskCreateDrawer(MutationDrawer[Task]):
    """Creates a task under one of the signed-in user's courses."""

    form_fields = ("course_id",) + TASK_FORM_FIELDS
    success_message = "Task added successfully"
    failure_message = "Failed to add task"

    def __init__(
        self,
        service: TaskService,
        course_service: CourseService,
        guard: SessionGuard,
        notifications: NotificationCenter,
        on_refresh: Refresh | None = None,
    ) -> None:
        super().__init__(notifications, on_refresh)
        self._service = service
        self._course_service = course_service
        self._guard = guard
        self.course_options: list[tuple[str, str]] = []

    async def load_course_options(self) -> list[tuple[str, str]]:
        """
        Load the (id, name) pairs offered in the course picker.

        A failed load leaves the picker empty and publishes an error.
        """
        try:
            user = self._guard.require_user()
            courses = await self._course_service.list_courses(user.id)
        except (AuthenticationRequiredError, RemoteError) as e:
            self._notifications.from_error(e, "Failed to load course list")
            self.course_options = []
            return []
        self.course_options = [(course.id, course.name) for course in courses]
        return list(self.course_options)

    def _validate(self, values):
        if not values.get("course_id"):
            raise ValidationError("A course must be selected", field="course_id")
        return validate_task_fields(values)

    async def _dispatch(self, payload):
        user = self._guard.require_user()
        return await self._service.create_task(user.id, self._values["course_id"], payload)


class DeleteConfirmation:
    """
    Single-step delete confirmation.

    Either outcome of `confirm()` closes the dialog; a failure is reported
    as a notification and the row stays in the list.
    """

    def __init__(
        self,
        entity_label: str,
        target_id: str,
        delete: Callable[[str], Awaitable[bool]],
        notifications: NotificationCenter,
        on_refresh: Refresh | None = None,
        target_name: str | None = None,
    ) -> None:
        self.entity_label = entity_label
        self.target_id = target_id
        self.target_name = target_name
        self._delete = delete
        self._notifications = notifications
        self._on_refresh = on_refresh
        self.is_open = True
        self.is_deleting = False

    @property
    def prompt(self) -> str:
        subject = f'"{self.target_name}"' if self.target_name else f"this {self.entity_label}"
        return f"Delete {subject}? This action cannot be undone."

    async def confirm(self) -> bool:
        """
        Delete the target.

        Returns:
            bool: True if the delete succeeded
        """
        if not self.is_open or self.is_deleting:
            return False

        self.is_deleting = True
        try:
            await self._delete(self.target_id)
        except RemoteError as e:
            self._notifications.from_error(e, f"Failed to delete {self.entity_label}")
            return False
        finally:
            self.is_deleting = False
            self.is_open = False

        self._notifications.success(f"{self.entity_label.capitalize()} deleted successfully")
        if self._on_refresh is not None:
            await self._on_refresh()
        return True

    def cancel(self) -> None:
        self.is_open = False
