"""
Task error handling utilities.
"""

from student_dashboard.api.routers.error_handling import (
    ResourceNotFoundError,
    domain_error_handler,
)


class TaskNotFoundError(ResourceNotFoundError):
    """Raised when a task is not found."""

    def __init__(self, task_id: str) -> None:
        super().__init__("task", task_id)


handle_task_errors = domain_error_handler("task")
