"""
Course gateway.

Table calls for the `courses` table. Listings are ordered by creation time.

Dependencies: student_dashboard.boundary.store.base_gateway
System role: Course persistence calls
"""

from student_dashboard.boundary.store.base_gateway import BaseGateway
from student_dashboard.models.course import COURSE_PROTECTED_FIELDS


class CourseGateway(BaseGateway):
    """Gateway for the `courses` table."""

    def __init__(self) -> None:
        """Initialize CourseGateway for the courses table."""
        super().__init__(
            table="courses",
            order_column="created_at",
            protected_fields=COURSE_PROTECTED_FIELDS,
        )


course_gateway = CourseGateway()
