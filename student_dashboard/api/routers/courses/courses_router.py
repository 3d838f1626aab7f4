"""
Course API endpoints.

Routes:
- POST /courses - Create new course
- GET /courses - List the caller's courses
- GET /courses/{id} - Get single course
- PUT /courses/{id} - Update course (complete editable field set)
- DELETE /courses/{id} - Delete course

Dependencies: student_dashboard.application.services, student_dashboard.models
System role: Course management HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from student_dashboard.api.deps.dependencies import get_course_service, get_current_user
from student_dashboard.application.services import CourseService
from student_dashboard.boundary.auth import AuthUser
from student_dashboard.core.validators import validate_course_fields
from student_dashboard.models.course import (
    CourseResponse,
    CreateCourseRequest,
    UpdateCourseRequest,
)

from .course_error_handling import CourseNotFoundError, handle_course_errors
from .course_responses import map_course_to_response, map_courses_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.post("", response_model=CourseResponse, status_code=201)
@handle_course_errors
async def create_course(
    request: CreateCourseRequest,
    user: AuthUser = Depends(get_current_user),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Create a course owned by the caller.

    Args:
        request: CreateCourseRequest with name and optional metadata fields
        user: Signed-in user
        course_service: Injected CourseService

    Returns:
        CourseResponse: Created course

    Raises:
        HTTPException(422): Field failed validation (no store call made)
        HTTPException(502): Store call failed
    """
    fields = validate_course_fields(request.model_dump())

    logger.info("Creating new course", extra={"course_name": fields.name, "user_id": user.id})

    course = await course_service.create_course(user.id, fields)
    return map_course_to_response(course)


@router.get("", response_model=list[CourseResponse])
@handle_course_errors
async def list_courses(
    user: AuthUser = Depends(get_current_user),
    course_service: CourseService = Depends(get_course_service),
) -> list[CourseResponse]:
    """
    List the caller's courses, oldest first.

    Raises:
        HTTPException(502): Store call failed
    """
    courses = await course_service.list_courses(user.id)

    logger.info("Courses retrieved", extra={"count": len(courses), "user_id": user.id})

    return map_courses_to_response(courses)


@router.get("/{course_id}", response_model=CourseResponse)
@handle_course_errors
async def get_course(
    course_id: str,
    user: AuthUser = Depends(get_current_user),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Get single course by ID.

    Raises:
        HTTPException(404): Course not found or owned by another user
        HTTPException(502): Store call failed
    """
    course = await course_service.get_course(user.id, course_id)
    if course is None:
        raise CourseNotFoundError(course_id)
    return map_course_to_response(course)


@router.put("/{course_id}", response_model=CourseResponse)
@handle_course_errors
async def update_course(
    course_id: str,
    request: UpdateCourseRequest,
    user: AuthUser = Depends(get_current_user),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Replace the editable fields of a course.

    Blank optional fields are cleared.

    Args:
        course_id: Course id
        request: UpdateCourseRequest carrying the complete editable field set
        user: Authenticated caller; only their course can match
        course_service: Injected CourseService

    Returns:
        CourseResponse: Updated course

    Raises:
        HTTPException(404): Course not found or owned by another user
        HTTPException(422): Field failed validation (no store call made)
        HTTPException(502): Store call failed
    """
    fields = validate_course_fields(request.model_dump())

    logger.info("Updating course", extra={"course_id": course_id})

    course = await course_service.update_course(user.id, course_id, fields)
    return map_course_to_response(course)


@router.delete("/{course_id}", status_code=204)
@handle_course_errors
async def delete_course(
    course_id: str,
    user: AuthUser = Depends(get_current_user),
    course_service: CourseService = Depends(get_course_service),
) -> None:
    """
    Delete course by ID. Deleting a missing course also returns 204.

    Raises:
        HTTPException(502): Store call failed
    """
    logger.info("Deleting course", extra={"course_id": course_id})

    await course_service.delete_course(user.id, course_id)
