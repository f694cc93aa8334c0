"""Classes API client - class rosters."""

from attendance_client.classes.client import ClassesClient
from attendance_client.classes.schemas import StudentSchema

__all__ = [
    "ClassesClient",
    "StudentSchema",
]
