"""Teacher API client - assigned classes, dashboard, profile."""

from attendance_client.base import BaseClient, as_list
from attendance_client.teacher.schemas import ClassSchema


class TeacherClient(BaseClient):
    """Client for teacher-scoped endpoints."""

    async def assigned_classes(self) -> list[dict]:
        """GET /teachers/classes - classes assigned to the teacher."""
        data = await self._get("teachers/classes", "Failed to fetch teacher classes")
        return [ClassSchema.model_validate(c).model_dump(by_alias=True) for c in as_list(data)]

    async def dashboard(self) -> dict:
        """GET /teachers/dashboard - dashboard summary."""
        return await self._get("teachers/dashboard", "Failed to fetch teacher dashboard")

    async def profile(self) -> dict:
        """GET /teachers/profile - teacher profile."""
        return await self._get("teachers/profile", "Failed to fetch teacher profile")
