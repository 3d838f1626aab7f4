"""Entity services (typed gateway surface)."""

from .course_service import CourseService
from .task_service import TaskService

__all__ = [
    "CourseService",
    "TaskService",
]
