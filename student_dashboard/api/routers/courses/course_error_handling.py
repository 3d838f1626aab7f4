"""
Course error handling utilities.

Not-found error and the decorator applied to every course endpoint.
"""

from student_dashboard.api.routers.error_handling import (
    ResourceNotFoundError,
    domain_error_handler,
)


class CourseNotFoundError(ResourceNotFoundError):
    """Raised when a course is not found."""

    def __init__(self, course_id: str) -> None:
        super().__init__("course", course_id)


handle_course_errors = domain_error_handler("course")
