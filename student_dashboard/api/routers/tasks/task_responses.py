"""
Task response mapping utilities.

Dependencies: student_dashboard.models.task
System role: Task response transformation
"""

from student_dashboard.models.task import Task, TaskResponse


def map_task_to_response(task: Task) -> TaskResponse:
    """Transform a Task entity (with its course name) into TaskResponse."""
    return TaskResponse(**task.model_dump())


def map_tasks_to_response(tasks: list[Task]) -> list[TaskResponse]:
    return [map_task_to_response(task) for task in tasks]
