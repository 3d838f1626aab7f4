"""
Task gateway.

Table calls for the `tasks` table. Reads embed the owning course through the
`tasks.course_id -> courses.id` relation and flatten it into `course_name`.
Listings are ordered by deadline.

Dependencies: student_dashboard.boundary.store.base_gateway
System role: Task persistence calls with read-side join
"""

from datetime import datetime, timezone
from typing import Any, Mapping

from student_dashboard.boundary.store.base_gateway import BaseGateway
from student_dashboard.models.task import TASK_PROTECTED_FIELDS

TASK_SELECT = "*, courses(name)"


class TaskGateway(BaseGateway):
    """
    Gateway for the `tasks` table.

    Writes return the joined row, so a created or updated task carries its
    course name like a listed one.
    """

    def __init__(self) -> None:
        """Initialize TaskGateway for the tasks table with course embedding."""
        super().__init__(
            table="tasks",
            order_column="deadline",
            protected_fields=TASK_PROTECTED_FIELDS,
            select_columns=TASK_SELECT,
        )

    def normalize_row(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Flatten the embedded course into `course_name` (None when unmatched)."""
        normalized = dict(row)
        course = normalized.pop("courses", None)
        normalized["course_name"] = course.get("name") if isinstance(course, Mapping) else None
        return normalized

    async def _read_back(self, client: Any, row: dict[str, Any]) -> dict[str, Any]:
        joined = await self.get_row(client, row["user_id"], row["id"])
        return joined if joined is not None else row

    async def insert_row(self, client: Any, values: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a task and return it with its course name."""
        row = await super().insert_row(client, values)
        return await self._read_back(client, row)

    async def update_row(
        self,
        client: Any,
        owner_id: str,
        id: str,
        values: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Update a task, stamping `updated_at`, and return it with its course name."""
        stamped = {**values, "updated_at": datetime.now(timezone.utc).isoformat()}
        row = await super().update_row(client, owner_id, id, stamped)
        return await self._read_back(client, row)


task_gateway = TaskGateway()
