"""
Task service.

Typed gateway surface for tasks. Listed, created and updated tasks carry the
name of their course; a task whose course is gone has `course_name = None`.

Dependencies: student_dashboard.boundary.store, student_dashboard.core
System role: Task remote data gateway
"""

import logging
from typing import Any, Mapping

from pydantic import BaseModel

from student_dashboard.application.services.payloads import to_store_values
from student_dashboard.boundary.store.task_gateway import task_gateway
from student_dashboard.core.exceptions import RemoteError
from student_dashboard.core.validators import parse_task_row
from student_dashboard.models.task import Task

logger = logging.getLogger(__name__)


class TaskService:
    """Task gateway bound to one Supabase client."""

    def __init__(self, client: Any) -> None:
        """
        Initialize task service with a Supabase client.

        Args:
            client: Supabase AsyncClient
        """
        self.client = client

    async def list_tasks(self, owner_id: str) -> list[Task]:
        """
        List all tasks owned by a user, earliest deadline first.

        Args:
            owner_id: Owning user id

        Returns:
            list[Task]: Typed tasks with course names
        """
        try:
            rows = await task_gateway.list_rows(self.client, owner_id)
            return [parse_task_row(row) for row in rows]
        except RemoteError as e:
            logger.error("Failed to list tasks", extra={"error": str(e), "owner_id": owner_id})
            raise

    async def get_task(self, owner_id: str, task_id: str) -> Task | None:
        """
        Get one of a user's tasks by ID.

        Returns:
            Task, or None when it does not exist or belongs to someone else
        """
        try:
            row = await task_gateway.get_row(self.client, owner_id, task_id)
            return parse_task_row(row) if row is not None else None
        except RemoteError as e:
            logger.error("Failed to get task", extra={"error": str(e), "task_id": task_id})
            raise

    async def create_task(
        self,
        owner_id: str,
        course_id: str,
        fields: BaseModel | Mapping[str, Any],
    ) -> Task:
        """
        Create a task under a course.

        Args:
            owner_id: Owning user id
            course_id: Course the task belongs to
            fields: Task fields (usually a validated TaskFields)

        Returns:
            Task: Created task with its course name
        """
        # Absent optional fields (status included) are omitted so store defaults apply
        values = {
            k: v
            for k, v in task_gateway.strip_protected(to_store_values(fields)).items()
            if v is not None and k != "course_name"
        }
        values["user_id"] = owner_id
        values["course_id"] = course_id
        try:
            row = await task_gateway.insert_row(self.client, values)
            task = parse_task_row(row)
        except RemoteError as e:
            logger.error(
                "Failed to create task",
                extra={"error": str(e), "course_id": course_id, "title": values.get("title")},
            )
            raise

        logger.info("Task created", extra={"task_id": task.id, "course_id": course_id})
        return task

    async def update_task(
        self,
        owner_id: str,
        task_id: str,
        updates: BaseModel | Mapping[str, Any],
    ) -> Task:
        """
        Update task fields; `updated_at` is stamped by the gateway.

        Args:
            owner_id: Owning user id
            task_id: Task id
            updates: Partial or complete editable field set

        Returns:
            Task: Updated task

        Raises:
            RemoteError: If the task does not exist or the call fails
        """
        values = task_gateway.strip_protected(to_store_values(updates))
        values.pop("course_name", None)
        try:
            row = await task_gateway.update_row(self.client, owner_id, task_id, values)
            task = parse_task_row(row)
        except RemoteError as e:
            logger.error("Failed to update task", extra={"error": str(e), "task_id": task_id})
            raise

        logger.info("Task updated", extra={"task_id": task_id, "updates": sorted(values)})
        return task

    async def delete_task(self, owner_id: str, task_id: str) -> bool:
        """
        Delete task. Deleting an already-deleted task succeeds.

        Returns:
            bool: True once the task is gone
        """
        try:
            deleted = await task_gateway.delete_row(self.client, owner_id, task_id)
        except RemoteError as e:
            logger.error("Failed to delete task", extra={"error": str(e), "task_id": task_id})
            raise

        logger.info("Task deleted", extra={"task_id": task_id})
        return deleted
