"""Teacher API client - assigned classes, dashboard, profile."""

from attendance_client.teacher.client import TeacherClient
from attendance_client.teacher.schemas import ClassSchema

__all__ = [
    "TeacherClient",
    "ClassSchema",
]
