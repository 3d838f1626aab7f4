"""
Course domain models and schemas.

Entity, editable field set, and request/response schemas for course operations.

Dependencies: pydantic
System role: Course shape and API contracts
"""

from datetime import datetime
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

CourseCategory = Literal["Wajib", "Pilihan", "Praktikum", "Tugas Akhir", "KKN", "Magang"]

COURSE_CATEGORIES: tuple[str, ...] = get_args(CourseCategory)

SEMESTER_RANGE = (1, 14)
SKS_RANGE = (1, 6)

# Columns the caller may never set on create or update.
COURSE_PROTECTED_FIELDS = frozenset({"id", "user_id", "created_at"})


class Course(BaseModel):
    """Course row as stored in the `courses` table."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    user_id: str
    name: str = Field(..., min_length=1)
    lecturer: str | None = None
    semester: int | None = Field(None, ge=SEMESTER_RANGE[0], le=SEMESTER_RANGE[1])
    sks: int | None = Field(None, ge=SKS_RANGE[0], le=SKS_RANGE[1])
    description: str | None = None
    category: CourseCategory | None = None
    created_at: datetime


class CourseFields(BaseModel):
    """Editable subset of a course, as accepted by the validator."""

    model_config = ConfigDict(frozen=True)

    name: str
    lecturer: str | None = None
    semester: int | None = None
    sks: int | None = None
    description: str | None = None
    category: CourseCategory | None = None


class CreateCourseRequest(BaseModel):
    """Request schema for creating a new course."""

    name: str = Field("", description="Course name")
    lecturer: str | None = Field(None, description="Lecturer name")
    semester: int | str | None = Field(None, description="Semester number (1-14)")
    sks: int | str | None = Field(None, description="Credit hours (1-6)")
    description: str | None = Field(None, description="Course description")
    category: str | None = Field(None, description="Course category")


class UpdateCourseRequest(CreateCourseRequest):
    """Request schema for updating a course (complete editable field set)."""


class CourseResponse(BaseModel):
    """Response schema for course operations."""

    id: str
    user_id: str
    name: str
    lecturer: str | None
    semester: int | None
    sks: int | None
    description: str | None
    category: str | None
    created_at: datetime
