"""
Course service.

Typed gateway surface for courses: every inbound row is parsed through the
entity schema before it reaches application state.

Dependencies: student_dashboard.boundary.store, student_dashboard.core
System role: Course remote data gateway
"""

import logging
from typing import Any, Mapping

from pydantic import BaseModel

from student_dashboard.application.services.payloads import to_store_values
from student_dashboard.boundary.store.course_gateway import course_gateway
from student_dashboard.core.exceptions import RemoteError
from student_dashboard.core.validators import parse_course_row
from student_dashboard.models.course import Course

logger = logging.getLogger(__name__)


class CourseService:
    """Course gateway bound to one Supabase client."""

    def __init__(self, client: Any) -> None:
        """
        Initialize course service with a Supabase client.

        Args:
            client: Supabase AsyncClient (anon key, optionally carrying a user token)
        """
        self.client = client

    async def list_courses(self, owner_id: str) -> list[Course]:
        """
        List all courses owned by a user, oldest first.

        Args:
            owner_id: Owning user id

        Returns:
            list[Course]: Typed courses

        Raises:
            RemoteError: If the store call fails or returns a malformed row
        """
        try:
            rows = await course_gateway.list_rows(self.client, owner_id)
            return [parse_course_row(row) for row in rows]
        except RemoteError as e:
            logger.error("Failed to list courses", extra={"error": str(e), "owner_id": owner_id})
            raise

    async def get_course(self, owner_id: str, course_id: str) -> Course | None:
        """
        Get one of a user's courses by ID.

        Args:
            owner_id: Owning user id
            course_id: Course id

        Returns:
            Course, or None when it does not exist or belongs to someone else

        Raises:
            RemoteError: For any failure other than "not found"
        """
        try:
            row = await course_gateway.get_row(self.client, owner_id, course_id)
            return parse_course_row(row) if row is not None else None
        except RemoteError as e:
            logger.error("Failed to get course", extra={"error": str(e), "course_id": course_id})
            raise

    async def create_course(
        self,
        owner_id: str,
        fields: BaseModel | Mapping[str, Any],
    ) -> Course:
        """
        Create a course owned by a user.

        Caller-supplied identity and timestamp columns are dropped.

        Args:
            owner_id: Owning user id
            fields: Course fields (usually a validated CourseFields)

        Returns:
            Course: Created course with generated id and created_at
        """
        # Absent optional fields are omitted so store defaults apply
        values = {
            k: v
            for k, v in course_gateway.strip_protected(to_store_values(fields)).items()
            if v is not None
        }
        values["user_id"] = owner_id
        try:
            row = await course_gateway.insert_row(self.client, values)
            course = parse_course_row(row)
        except RemoteError as e:
            logger.error(
                "Failed to create course",
                extra={"error": str(e), "course_name": values.get("name")},
            )
            raise

        logger.info("Course created", extra={"course_id": course.id, "course_name": course.name})
        return course

    async def update_course(
        self,
        owner_id: str,
        course_id: str,
        updates: BaseModel | Mapping[str, Any],
    ) -> Course:
        """
        Update fields of one of a user's courses.

        Args:
            owner_id: Owning user id
            course_id: Course id
            updates: Partial or complete editable field set

        Returns:
            Course: Updated course

        Raises:
            RemoteError: If the course does not exist or the call fails
        """
        values = course_gateway.strip_protected(to_store_values(updates))
        try:
            row = await course_gateway.update_row(self.client, owner_id, course_id, values)
            course = parse_course_row(row)
        except RemoteError as e:
            logger.error("Failed to update course", extra={"error": str(e), "course_id": course_id})
            raise

        logger.info("Course updated", extra={"course_id": course_id, "updates": sorted(values)})
        return course

    async def delete_course(self, owner_id: str, course_id: str) -> bool:
        """
        Delete course. Deleting an already-deleted course succeeds.

        Args:
            owner_id: Owning user id
            course_id: Course id

        Returns:
            bool: True once the course is gone
        """
        try:
            deleted = await course_gateway.delete_row(self.client, owner_id, course_id)
        except RemoteError as e:
            logger.error("Failed to delete course", extra={"error": str(e), "course_id": course_id})
            raise

        logger.info("Course deleted", extra={"course_id": course_id})
        return deleted
