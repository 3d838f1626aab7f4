"""
Hosted store boundary: Supabase client construction and table gateways.

Exports:
  - create_store_client(), close_store_client(): Async Supabase client lifecycle
  - BaseGateway, CourseGateway, TaskGateway: Table call classes
  - course_gateway, task_gateway: Gateway singletons

Dependencies: supabase, student_dashboard.configs
System role: Store adapter for courses and tasks
"""

from student_dashboard.boundary.store.base_gateway import BaseGateway
from student_dashboard.boundary.store.client import close_store_client, create_store_client
from student_dashboard.boundary.store.course_gateway import CourseGateway, course_gateway
from student_dashboard.boundary.store.task_gateway import TaskGateway, task_gateway

__all__ = [
    "BaseGateway",
    "CourseGateway",
    "TaskGateway",
    "close_store_client",
    "course_gateway",
    "create_store_client",
    "task_gateway",
]
