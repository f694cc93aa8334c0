"""Attendance API client package."""

from attendance_client.base import BaseClient, as_list, safe_request
from attendance_client.classes import ClassesClient
from attendance_client.errors import ApiError
from attendance_client.teacher import TeacherClient

__all__ = [
    # Base
    "BaseClient",
    "ApiError",
    "as_list",
    "safe_request",
    # Clients
    "TeacherClient",
    "ClassesClient",
]
