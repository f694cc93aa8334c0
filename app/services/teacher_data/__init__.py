"""Teacher data - cached domain loads and their orchestration."""

from app.services.teacher_data.fetchers import TeacherApi
from app.services.teacher_data.orchestrator import Listener, TeacherDataOrchestrator
from app.services.teacher_data.service import Fetcher, TeacherDataService, join_classes_with_students

__all__ = [
    "Fetcher",
    "Listener",
    "TeacherApi",
    "TeacherDataOrchestrator",
    "TeacherDataService",
    "join_classes_with_students",
]
