"""
Core domain module.

Exception hierarchy and the entity validation boundary.
"""

from student_dashboard.core.exceptions import (
    AuthenticationRequiredError,
    DashboardError,
    RemoteError,
    ValidationError,
)
from student_dashboard.core.validators import (
    parse_course_row,
    parse_task_row,
    parse_timestamp,
    validate_course_fields,
    validate_task_fields,
)

__all__ = [
    "AuthenticationRequiredError",
    "DashboardError",
    "RemoteError",
    "ValidationError",
    "parse_course_row",
    "parse_task_row",
    "parse_timestamp",
    "validate_course_fields",
    "validate_task_fields",
]
