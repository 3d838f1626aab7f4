"""
Exception hierarchy for the student dashboard.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DashboardError(Exception):
    """Base exception for all dashboard application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DashboardError):
    """Raised when a candidate record fails local validation."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Name of the first field that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class AuthenticationRequiredError(DashboardError):
    """Raised when an operation needs a session and none is available."""

    def __init__(
        self,
        message: str = "Authentication required",
        redirect_to: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize authentication error.

        Args:
            message: Error message
            redirect_to: Route the user should be sent to (usually the login route)
            details: Additional context
        """
        details = details or {}
        if redirect_to:
            details["redirect_to"] = redirect_to
        self.redirect_to = redirect_to
        super().__init__(message, details)


class RemoteError(DashboardError):
    """Raised when a call against the hosted store or auth provider fails."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        hint: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize remote error.

        Args:
            message: Error message reported by the backend
            code: Backend error code (e.g. PostgREST or Postgres code)
            hint: Backend hint, when provided
            operation: Gateway operation that failed (list, get, create, update, delete)
            details: Additional context
        """
        details = details or {}
        if code:
            details["code"] = code
        if hint:
            details["hint"] = hint
        if operation:
            details["operation"] = operation
        self.code = code
        self.hint = hint
        self.operation = operation
        super().__init__(message, details)
