"""Application layer: services, session guard, list views and mutation flows."""

from student_dashboard.application.list_view import ListViewController, ViewStatus
from student_dashboard.application.mutation_drawer import (
    CourseCreateDrawer,
    CourseEditDrawer,
    DeleteConfirmation,
    DrawerState,
    TaskCreateDrawer,
    TaskEditDrawer,
)
from student_dashboard.application.notifications import Notification, NotificationCenter
from student_dashboard.application.row_actions import (
    CourseRowActions,
    DetailView,
    TaskRowActions,
)
from student_dashboard.application.session_guard import SessionGuard, SessionState

__all__ = [
    "CourseCreateDrawer",
    "CourseEditDrawer",
    "CourseRowActions",
    "DeleteConfirmation",
    "DetailView",
    "DrawerState",
    "ListViewController",
    "Notification",
    "NotificationCenter",
    "SessionGuard",
    "SessionState",
    "TaskCreateDrawer",
    "TaskEditDrawer",
    "TaskRowActions",
    "ViewStatus",
]
