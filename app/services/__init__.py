"""Services package - service class exports."""

from app.services.teacher_data import TeacherApi, TeacherDataOrchestrator, TeacherDataService

__all__ = [
    "TeacherApi",
    "TeacherDataOrchestrator",
    "TeacherDataService",
]
