"""
Row action surface.

Per-row menu for the course and task tables: read-only detail, edit, and
delete with confirmation. Edit and delete both end in a list refresh.

Dependencies: student_dashboard.application.mutation_drawer
System role: Row-level actions for list views
"""

from dataclasses import dataclass
from functools import partial
from datetime import datetime, timezone

from student_dashboard.application.list_view import ListViewController
from student_dashboard.application.mutation_drawer import (
    CourseEditDrawer,
    DeleteConfirmation,
    TaskEditDrawer,
)
from student_dashboard.application.notifications import NotificationCenter
from student_dashboard.application.services.course_service import CourseService
from student_dashboard.application.services.task_service import TaskService
from student_dashboard.models.course import Course
from student_dashboard.models.task import DEFAULT_TASK_STATUS, Task

ABSENT = "-"


@dataclass(frozen=True)
class DetailView:
    """Read-only, labelled rendering of one row."""

    title: str
    fields: tuple[tuple[str, str], ...]

    def get(self, label: str) -> str | None:
        for name, value in self.fields:
            if name == label:
                return value
        return None


def _text(value) -> str:
    if value is None or value == "":
        return ABSENT
    return str(value)


def _date(value: datetime | None) -> str:
    if value is None:
        return ABSENT
    return value.astimezone(timezone.utc).strftime("%d %b %Y")


def _date_time(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%d %b %Y %H:%M UTC")


def course_detail(course: Course) -> DetailView:
    return DetailView(
        title="Course Detail",
        fields=(
            ("Course Name", course.name),
            ("Lecturer", _text(course.lecturer)),
            ("Semester", f"Semester {course.semester}" if course.semester else ABSENT),
            ("SKS", f"{course.sks} SKS" if course.sks else ABSENT),
            ("Category", _text(course.category)),
            ("Description", _text(course.description)),
            ("Added", _date(course.created_at)),
        ),
    )


def task_detail(task: Task) -> DetailView:
    status = task.status or DEFAULT_TASK_STATUS
    return DetailView(
        title="Task Detail",
        fields=(
            ("Title", task.title),
            ("Course", _text(task.course_name)),
            ("Description", _text(task.description)),
            ("Deadline", _date_time(task.deadline)),
            ("Status", status.capitalize()),
            ("Added", _date(task.created_at)),
            ("Updated", _date(task.updated_at)),
        ),
    )


class CourseRowActions:
    """Actions offered on a course row."""

    def __init__(
        self,
        service: CourseService,
        view: ListViewController[Course],
        notifications: NotificationCenter,
    ) -> None:
        self._service = service
        self._view = view
        self._notifications = notifications

    def view_detail(self, course: Course) -> DetailView:
        return course_detail(course)

    def edit(self, course: Course) -> CourseEditDrawer:
        """Open the edit drawer prefilled from the row."""
        drawer = CourseEditDrawer(self._service, self._notifications, on_refresh=self._view.refresh)
        drawer.open_for(course)
        return drawer

    def request_delete(self, course: Course) -> DeleteConfirmation:
        """Open the delete confirmation for the row."""
        return DeleteConfirmation(
            "course",
            course.id,
            partial(self._service.delete_course, course.user_id),
            self._notifications,
            on_refresh=self._view.refresh,
            target_name=course.name,
        )


class TaskRowActions:
    """Actions offered on a task row."""

    def __init__(
        self,
        service: TaskService,
        view: ListViewController[Task],
        notifications: NotificationCenter,
    ) -> None:
        self._service = service
        self._view = view
        self._notifications = notifications

    def view_detail(self, task: Task) -> DetailView:
        return task_detail(task)

    def edit(self, task: Task) -> TaskEditDrawer:
        drawer = TaskEditDrawer(self._service, self._notifications, on_refresh=self._view.refresh)
        drawer.open_for(task)
        return drawer

    def request_delete(self, task: Task) -> DeleteConfirmation:
        return DeleteConfirmation(
            "task",
            task.id,
            partial(self._service.delete_task, task.user_id),
            self._notifications,
            on_refresh=self._view.refresh,
            target_name=task.title,
        )
