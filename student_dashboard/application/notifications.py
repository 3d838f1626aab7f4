"""
Transient user-facing notifications.

Success and error messages raised by row actions, drawers and list loaders.
Kept in a bounded feed for the UI shell to display, and logged.

Dependencies: logging (stdlib)
System role: Toast-style notification feed
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Literal

from student_dashboard.core.exceptions import DashboardError

logger = logging.getLogger(__name__)

NotificationLevel = Literal["success", "error"]


@dataclass(frozen=True)
class Notification:
    """One transient message."""

    level: NotificationLevel
    message: str
    details: dict[str, Any] = field(default_factory=dict)


class NotificationCenter:
    """Bounded in-memory notification feed."""

    def __init__(self, max_items: int = 20) -> None:
        """
        Initialize the feed.

        Args:
            max_items: Oldest notifications are dropped beyond this count
        """
        self._feed: deque[Notification] = deque(maxlen=max_items)

    def success(self, message: str, **details: Any) -> Notification:
        """Publish a success message."""
        notification = Notification("success", message, details)
        self._feed.append(notification)
        logger.info(message, extra={"notification": "success", "details": details})
        return notification

    def error(self, message: str, **details: Any) -> Notification:
        """Publish an error message."""
        notification = Notification("error", message, details)
        self._feed.append(notification)
        logger.warning(message, extra={"notification": "error", "details": details})
        return notification

    def from_error(self, error: DashboardError, fallback: str) -> Notification:
        """
        Publish an error message for a caught domain error.

        Args:
            error: Caught error; its message is shown when present
            fallback: Message used when the error carries none
        """
        return self.error(error.message or fallback, **error.details)

    @property
    def recent(self) -> list[Notification]:
        """Notifications currently in the feed, oldest first."""
        return list(self._feed)

    def drain(self) -> list[Notification]:
        """Return and clear all pending notifications."""
        items = list(self._feed)
        self._feed.clear()
        return items
