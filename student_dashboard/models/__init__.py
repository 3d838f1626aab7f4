"""Entity models and API schemas."""

from student_dashboard.models.course import Course, CourseFields
from student_dashboard.models.task import Task, TaskFields

__all__ = ["Course", "CourseFields", "Task", "TaskFields"]
