"""
Task API endpoints.

Routes:
- POST /tasks - Create new task under a course
- GET /tasks - List the caller's tasks, earliest deadline first
- GET /tasks/{id} - Get single task
- PUT /tasks/{id} - Update task (complete editable field set)
- DELETE /tasks/{id} - Delete task

Dependencies: student_dashboard.application.services, student_dashboard.models
System role: Task management HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from student_dashboard.api.deps.dependencies import get_current_user, get_task_service
from student_dashboard.application.services import TaskService
from student_dashboard.boundary.auth import AuthUser
from student_dashboard.core.exceptions import ValidationError
from student_dashboard.core.validators import validate_task_fields
from student_dashboard.models.task import (
    DEFAULT_TASK_STATUS,
    CreateTaskRequest,
    TaskResponse,
    UpdateTaskRequest,
)

from .task_error_handling import TaskNotFoundError, handle_task_errors
from .task_responses import map_task_to_response, map_tasks_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=201)
@handle_task_errors
async def create_task(
    request: CreateTaskRequest,
    user: AuthUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Create a task owned by the caller.

    Args:
        request: CreateTaskRequest with course_id, title, deadline and optional fields
        user: Signed-in user
        task_service: Injected TaskService

    Returns:
        TaskResponse: Created task with its course name

    Raises:
        HTTPException(422): Missing course or field failed validation
        HTTPException(502): Store call failed
    """
    if not request.course_id:
        raise ValidationError("A course must be selected", field="course_id")
    fields = validate_task_fields(request.model_dump(exclude={"course_id"}))

    logger.info(
        "Creating new task",
        extra={"course_id": request.course_id, "title": fields.title, "user_id": user.id},
    )

    task = await task_service.create_task(user.id, request.course_id, fields)
    return map_task_to_response(task)


@router.get("", response_model=list[TaskResponse])
@handle_task_errors
async def list_tasks(
    user: AuthUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    """List the caller's tasks with course names."""
    tasks = await task_service.list_tasks(user.id)

    logger.info("Tasks retrieved", extra={"count": len(tasks), "user_id": user.id})

    return map_tasks_to_response(tasks)


@router.get("/{task_id}", response_model=TaskResponse)
@handle_task_errors
async def get_task(
    task_id: str,
    user: AuthUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Get single task by ID.

    Raises:
        HTTPException(404): Task not found or owned by another user
    """
    task = await task_service.get_task(user.id, task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return map_task_to_response(task)


@router.put("/{task_id}", response_model=TaskResponse)
@handle_task_errors
async def update_task(
    task_id: str,
    request: UpdateTaskRequest,
    user: AuthUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Replace the editable fields of a task.

    A blank status is stored as "pending".

    Raises:
        HTTPException(404): Task not found or owned by another user
        HTTPException(422): Field failed validation (no store call made)
        HTTPException(502): Store call failed
    """
    fields = validate_task_fields(request.model_dump())
    if fields.status is None:
        fields = fields.model_copy(update={"status": DEFAULT_TASK_STATUS})

    logger.info("Updating task", extra={"task_id": task_id})

    task = await task_service.update_task(user.id, task_id, fields)
    return map_task_to_response(task)


@router.delete("/{task_id}", status_code=204)
@handle_task_errors
async def delete_task(
    task_id: str,
    user: AuthUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> None:
    """Delete task by ID. Deleting a missing task also returns 204."""
    logger.info("Deleting task", extra={"task_id": task_id})

    await task_service.delete_task(user.id, task_id)
