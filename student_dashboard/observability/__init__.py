"""
Observability module.

Provides logging configuration, correlation ID tracking, and request
logging middleware.
"""

from student_dashboard.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from student_dashboard.observability.logger import configure_logging, get_logger

__all__ = [
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "set_correlation_id",
]
