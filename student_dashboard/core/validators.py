"""
Entity validation utilities.

Checks candidate course and task records before they are sent to the store,
and types the rows that come back from it. Outbound checks stop at the first
failing field; the store remains the real authority.

Dependencies: pydantic, student_dashboard.models
System role: Entity schema & validation boundary
"""

from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from student_dashboard.core.exceptions import RemoteError, ValidationError
from student_dashboard.models.course import (
    COURSE_CATEGORIES,
    SEMESTER_RANGE,
    SKS_RANGE,
    Course,
    CourseFields,
)
from student_dashboard.models.task import TASK_STATUSES, Task, TaskFields

_TIMESTAMP = TypeAdapter(datetime)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _optional_text(raw: Mapping[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if _is_blank(value):
        return None
    return str(value).strip()


def _optional_int_in_range(
    raw: Mapping[str, Any],
    key: str,
    bounds: tuple[int, int],
    label: str,
) -> int | None:
    value = raw.get(key)
    if _is_blank(value):
        return None

    low, high = bounds
    message = f"{label} must be between {low} and {high}"

    if isinstance(value, bool):
        raise ValidationError(message, field=key)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            raise ValidationError(message, field=key, details={"value": value}) from None
    else:
        raise ValidationError(message, field=key)

    if not low <= number <= high:
        raise ValidationError(message, field=key, details={"value": number})
    return number


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a timestamp from a datetime or an ISO-8601 string.

    Accepts the `YYYY-MM-DDTHH:MM` shape of a datetime-local input.
    Naive values are taken to be UTC.

    Raises:
        ValueError: If the value cannot be parsed
    """
    try:
        parsed = _TIMESTAMP.validate_python(value.strip() if isinstance(value, str) else value)
    except PydanticValidationError as e:
        raise ValueError(f"Unparseable timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def validate_course_fields(raw: Mapping[str, Any]) -> CourseFields:
    """
    Validate a candidate course record.

    Rules are checked in order: name, semester, sks, category.

    Args:
        raw: Key/value mapping, typically form input (strings allowed)

    Returns:
        CourseFields: Accepted editable field set

    Raises:
        ValidationError: Naming the first failing field
    """
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Course name cannot be empty", field="name")

    semester = _optional_int_in_range(raw, "semester", SEMESTER_RANGE, "Semester")
    sks = _optional_int_in_range(raw, "sks", SKS_RANGE, "SKS")

    category = _optional_text(raw, "category")
    if category is not None and category not in COURSE_CATEGORIES:
        raise ValidationError(
            "Invalid course category",
            field="category",
            details={"value": category, "allowed": list(COURSE_CATEGORIES)},
        )

    return CourseFields(
        name=name.strip(),
        lecturer=_optional_text(raw, "lecturer"),
        semester=semester,
        sks=sks,
        description=_optional_text(raw, "description"),
        category=category,
    )


def validate_task_fields(raw: Mapping[str, Any]) -> TaskFields:
    """
    Validate a candidate task record.

    Rules are checked in order: title, deadline, status.

    Args:
        raw: Key/value mapping, typically form input

    Returns:
        TaskFields: Accepted editable field set

    Raises:
        ValidationError: Naming the first failing field
    """
    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Task title cannot be empty", field="title")

    deadline_raw = raw.get("deadline")
    if _is_blank(deadline_raw):
        raise ValidationError("Deadline cannot be empty", field="deadline")
    try:
        deadline = parse_timestamp(deadline_raw)
    except ValueError:
        raise ValidationError(
            "Deadline is not a valid timestamp",
            field="deadline",
            details={"value": str(deadline_raw)},
        ) from None

    status = _optional_text(raw, "status")
    if status is not None and status not in TASK_STATUSES:
        raise ValidationError(
            "Invalid task status",
            field="status",
            details={"value": status, "allowed": list(TASK_STATUSES)},
        )

    return TaskFields(
        title=title.strip(),
        description=_optional_text(raw, "description"),
        deadline=deadline,
        status=status,
    )


def _first_error_field(error: PydanticValidationError) -> str | None:
    errors = error.errors()
    if not errors or not errors[0].get("loc"):
        return None
    return str(errors[0]["loc"][0])


def parse_course_row(row: Mapping[str, Any]) -> Course:
    """
    Type a course row returned by the store.

    Raises:
        RemoteError: If the row does not have the expected shape
    """
    try:
        return Course.model_validate(dict(row))
    except PydanticValidationError as e:
        field = _first_error_field(e)
        raise RemoteError(
            "Malformed course row returned by store",
            code="malformed_row",
            details={"table": "courses", "field": field, "id": row.get("id")},
        ) from e


def parse_task_row(row: Mapping[str, Any]) -> Task:
    """
    Type a (flattened) task row returned by the store.

    Raises:
        RemoteError: If the row does not have the expected shape
    """
    try:
        return Task.model_validate(dict(row))
    except PydanticValidationError as e:
        field = _first_error_field(e)
        raise RemoteError(
            "Malformed task row returned by store",
            code="malformed_row",
            details={"table": "tasks", "field": field, "id": row.get("id")},
        ) from e
