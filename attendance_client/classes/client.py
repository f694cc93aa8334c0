"""Classes API client - class rosters."""

from attendance_client.base import BaseClient, as_list
from attendance_client.classes.schemas import StudentSchema


class ClassesClient(BaseClient):
    """Client for class endpoints."""

    async def students(self, class_id: str) -> list[dict]:
        """GET /classes/{class_id}/students - active students in a class.

        The endpoint omits ``classId`` on each student, so it is filled in
        from the requested class.
        """
        data = await self._get(f"classes/{class_id}/students", "Failed to fetch class students")
        students = []
        for raw in as_list(data):
            student = StudentSchema.model_validate(raw)
            if student.class_id is None:
                student.class_id = class_id
            students.append(student.model_dump(by_alias=True))
        return students
