"""
Course response mapping utilities.

Transforms typed Course entities into API response models.

Dependencies: student_dashboard.models.course
System role: Course response transformation
"""

from student_dashboard.models.course import Course, CourseResponse


def map_course_to_response(course: Course) -> CourseResponse:
    """
    Transform a Course entity into CourseResponse.

    Args:
        course: Typed course parsed from a store row

    Returns:
        CourseResponse: Pydantic model for API response
    """
    return CourseResponse(**course.model_dump())


def map_courses_to_response(courses: list[Course]) -> list[CourseResponse]:
    """
    Transform a list of Course entities into CourseResponse models.

    Args:
        courses: Typed courses, in list order

    Returns:
        list[CourseResponse]: Pydantic models for API response
    """
    return [map_course_to_response(course) for course in courses]
