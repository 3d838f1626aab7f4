"""
Shared error handling for API routers.

Maps dashboard domain exceptions to HTTP responses and provides the decorator
factory behind `handle_course_errors` / `handle_task_errors`.

Dependencies: fastapi, student_dashboard.core.exceptions
System role: Domain error -> HTTP status translation
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from student_dashboard.core.exceptions import (
    AuthenticationRequiredError,
    DashboardError,
    RemoteError,
    ValidationError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

REMOTE_NOT_FOUND_CODE = "not_found"


class ResourceNotFoundError(DashboardError):
    """Raised by a router when a requested row does not exist."""

    def __init__(self, resource: str, resource_id: str) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"{resource.capitalize()} not found",
            {"resource": resource, "id": resource_id},
        )


def to_http_exception(error: DashboardError) -> HTTPException:
    """
    Translate a domain exception into an HTTPException.

    Mapping:
        ValidationError -> 422 (names the failing field)
        AuthenticationRequiredError -> 401 (carries the login route)
        ResourceNotFoundError, RemoteError(code=not_found) -> 404
        RemoteError -> 502
        other DashboardError -> 500
    """
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": error.message, "field": error.field},
        )
    if isinstance(error, AuthenticationRequiredError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": error.message, "redirect_to": error.redirect_to},
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(error, ResourceNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, RemoteError):
        if error.code == REMOTE_NOT_FOUND_CODE:
            return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": error.message, "code": error.code, "hint": error.hint},
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error.message,
    )


def domain_error_handler(resource: str) -> Callable[[F], F]:
    """
    Build a decorator that turns domain errors raised by an endpoint into
    HTTPExceptions, logging each with the resource it concerns.

    Args:
        resource: Resource label used in log records ("course", "task")
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)

            except HTTPException:
                raise

            except (ValidationError, ResourceNotFoundError, AuthenticationRequiredError) as e:
                logger.warning(
                    f"Rejected {resource} request",
                    extra={"resource": resource, "error": str(e)},
                )
                raise to_http_exception(e) from e

            except RemoteError as e:
                logger.error(
                    f"Store call failed in {resource} operation",
                    extra={"resource": resource, "error": str(e), "code": e.code},
                )
                raise to_http_exception(e) from e

            except Exception as e:
                logger.exception(
                    f"Unexpected failure in {resource} operation",
                    extra={"resource": resource, "error": str(e)},
                )
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"An internal error occurred during {resource} operation",
                ) from e

        return wrapper  # type: ignore

    return decorator
