"""Remote fetchers for teacher data domains."""

import asyncio
from contextlib import AsyncExitStack

import httpx
from loguru import logger

from app.models import DomainKey
from attendance_client import ClassesClient, TeacherClient, safe_request
from settings import API_BASE_URL, MAX_CONCURRENT


class TeacherApi:
    """Adapts the attendance API clients to one fetcher per base domain."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        token: str | None = None,
        max_concurrent: int = MAX_CONCURRENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.teacher = TeacherClient(base_url, token, max_concurrent, transport=transport)
        self.classes = ClassesClient(base_url, token, max_concurrent, transport=transport)
        self._stack: AsyncExitStack | None = None

    async def __aenter__(self):
        async with AsyncExitStack() as stack:
            await stack.enter_async_context(self.teacher)
            await stack.enter_async_context(self.classes)
            self._stack = stack.pop_all()
        return self

    async def __aexit__(self, *exc):
        if self._stack:
            await self._stack.__aexit__(*exc)
            self._stack = None

    def set_token(self, token: str | None) -> None:
        self.teacher.set_token(token)
        self.classes.set_token(token)

    async def fetch_classes(self) -> list[dict]:
        return await self.teacher.assigned_classes()

    async def fetch_students(self) -> list[dict]:
        """Students of every assigned class, fetched per class in parallel.

        A class whose roster cannot be fetched contributes no students.
        Students appearing in several classes are kept once.
        """
        classes = await self.teacher.assigned_classes()
        class_ids = [c["id"] for c in classes]
        if not class_ids:
            return []

        rosters = await asyncio.gather(*(safe_request(self.classes.students(cid), []) for cid in class_ids))
        unique: dict[str, dict] = {}
        for roster in rosters:
            for student in roster:
                unique.setdefault(student["id"], student)
        logger.debug("Students: {} across {} classes", len(unique), len(class_ids))
        return list(unique.values())

    async def fetch_dashboard(self) -> dict:
        return await self.teacher.dashboard()

    async def fetch_profile(self) -> dict:
        return await self.teacher.profile()

    def fetchers(self) -> dict:
        return {
            DomainKey.CLASSES: self.fetch_classes,
            DomainKey.STUDENTS: self.fetch_students,
            DomainKey.DASHBOARD: self.fetch_dashboard,
            DomainKey.PROFILE: self.fetch_profile,
        }
