"""Teacher data service - fetch-through-cache per domain."""

import asyncio
from collections import defaultdict
from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime, timedelta, timezone
from functools import partial
from typing import Any

from loguru import logger

from app.errors import LoadSkipped
from app.models import BASE_DOMAINS, STORAGE_KEYS, DomainKey, StorageSnapshot, TeacherDataBundle
from app.repositories import ExpiringStore
from app.tasks import DetachedTasks

Fetcher = Callable[[], Awaitable[Any]]
Guard = Callable[[], bool]
Batch = dict[DomainKey, asyncio.Task]


def join_classes_with_students(classes: list[dict], students: list[dict]) -> list[dict]:
    """Attach each class's members.

    A student belongs to a class when listed in its ``studentIds`` or when
    its ``classId`` names the class. Member order follows ``studentIds``
    first, then roster order; duplicates are dropped.
    """
    by_id = {s["id"]: s for s in students if s.get("id") is not None}
    by_class: dict[str, list[dict]] = defaultdict(list)
    for student in students:
        if student.get("classId"):
            by_class[student["classId"]].append(student)

    result = []
    for cls in classes:
        members: dict[Any, dict] = {}
        for sid in cls.get("studentIds") or []:
            if sid in by_id:
                members.setdefault(sid, by_id[sid])
        for student in by_class.get(cls.get("id"), []):
            members.setdefault(student.get("id"), student)
        result.append({**cls, "students": list(members.values())})
    return result


class TeacherDataService:
    """Serves every DomainKey from the store, fetching on miss or on demand.

    Base domains use the registered fetchers; ``classesWithStudents`` is built
    from the ``classes`` and ``students`` loads. A cache-first load joins a
    fetch already running for the same domain instead of starting another.
    A forced load always starts its own fetch, so overlapping forced and
    cache-first loads race and the last store write wins. With
    ``single_flight`` on, forced loads join the running fetch as well.

    ``guard`` is checked before a fetch is issued and before its result is
    stored; once it returns False the load raises ``LoadSkipped`` and a
    finished fetch is not written back.
    """

    def __init__(
        self,
        store: ExpiringStore,
        fetchers: Mapping[DomainKey, Fetcher],
        tasks: DetachedTasks,
        single_flight: bool = False,
    ):
        missing = [k.value for k in BASE_DOMAINS if k not in fetchers]
        if missing:
            raise ValueError(f"No fetcher registered for: {', '.join(missing)}")
        self._store = store
        self._fetchers = dict(fetchers)
        self._tasks = tasks
        self._single_flight = single_flight
        self._inflight: dict[DomainKey, asyncio.Task] = {}

    @property
    def ttl(self) -> float:
        return self._store.ttl

    async def load(
        self,
        key: DomainKey,
        force_refresh: bool = False,
        guard: Guard | None = None,
        batch: Batch | None = None,
    ) -> Any:
        """Cached value for ``key``, fetching when absent, expired or forced.

        Loads sharing a ``batch`` run each domain at most once: the derived
        domain reuses the ``classes`` and ``students`` loads of its batch,
        finished or not.
        """
        if batch is None:
            return await self._load(key, force_refresh, guard, None)
        task = batch.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, force_refresh, guard, batch))
            batch[key] = task
        return await asyncio.shield(task)

    async def _load(self, key: DomainKey, force_refresh: bool, guard: Guard | None, batch: Batch | None) -> Any:
        if key is DomainKey.CLASSES_WITH_STUDENTS:
            return await self.load_derived(force_refresh, guard, batch)
        return await self._through_cache(key, force_refresh, self._fetchers[key], guard)

    async def load_derived(
        self, force_refresh: bool = False, guard: Guard | None = None, batch: Batch | None = None
    ) -> list[dict]:
        """Classes joined with their students.

        A forced load forces both inputs; otherwise cached inputs are reused.
        """

        async def compose() -> list[dict]:
            classes, students = await asyncio.gather(
                self.load(DomainKey.CLASSES, force_refresh, guard, batch),
                self.load(DomainKey.STUDENTS, force_refresh, guard, batch),
            )
            return join_classes_with_students(classes, students)

        return await self._through_cache(DomainKey.CLASSES_WITH_STUDENTS, force_refresh, compose, guard)

    async def _through_cache(
        self, key: DomainKey, force_refresh: bool, fetch: Fetcher, guard: Guard | None
    ) -> Any:
        log = logger.bind(domain=key.value)
        if not force_refresh:
            cached = await self._store.get(key.storage_key)
            if cached is not None:
                log.debug("Using cached {}", key.label)
                return cached

        if guard is not None and not guard():
            log.info("Session ended, not fetching {}", key.label)
            raise LoadSkipped(key.value)

        task = self._inflight.get(key)
        if task is not None and (self._single_flight or not force_refresh):
            log.debug("Joining in-flight fetch for {}", key.label)
        else:
            task = asyncio.ensure_future(self._fetch_and_store(key, fetch, guard))
            self._inflight[key] = task
            task.add_done_callback(partial(self._forget_inflight, key))
        # a cancelled caller must not cancel the fetch others are waiting on
        return await asyncio.shield(task)

    def _forget_inflight(self, key: DomainKey, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _fetch_and_store(self, key: DomainKey, fetch: Fetcher, guard: Guard | None) -> Any:
        log = logger.bind(domain=key.value)
        log.info("Fetching {} from API", key.label)
        value = await fetch()
        if guard is not None and not guard():
            log.info("Session ended, dropping fetched {}", key.label)
            raise LoadSkipped(key.value)
        await self._store.set(key.storage_key, value)
        log.info("Cached {}{}", key.label, f" ({len(value)} items)" if isinstance(value, list) else "")
        return value

    async def has_valid_data(self) -> dict[DomainKey, bool]:
        """Which domains currently hold a live cache entry. Never fetches."""
        keys = list(DomainKey)
        valid = await asyncio.gather(*(self._store.has_valid(k.storage_key) for k in keys))
        return dict(zip(keys, valid))

    async def remaining_ttls(self) -> dict[DomainKey, float | None]:
        keys = list(DomainKey)
        remaining = await asyncio.gather(*(self._store.remaining_ttl(k.storage_key) for k in keys))
        return dict(zip(keys, remaining))

    async def snapshot(self) -> StorageSnapshot:
        return await self._store.snapshot()

    async def clear_all(self) -> None:
        """Remove every domain's entry."""
        await self._store.remove_many(STORAGE_KEYS.values())

    def clear_all_detached(self) -> asyncio.Task:
        """Best-effort clear for sign-out; a failure is only logged."""
        return self._tasks.spawn(self.clear_all(), name="clear-teacher-data")

    async def preload(self) -> TeacherDataBundle:
        """Force-refresh every domain concurrently, fetching each base domain once."""
        batch: Batch = {}
        classes, students, classes_with_students, dashboard, profile = await asyncio.gather(
            self.load(DomainKey.CLASSES, True, batch=batch),
            self.load(DomainKey.STUDENTS, True, batch=batch),
            self.load(DomainKey.CLASSES_WITH_STUDENTS, True, batch=batch),
            self.load(DomainKey.DASHBOARD, True, batch=batch),
            self.load(DomainKey.PROFILE, True, batch=batch),
        )
        now = datetime.now(timezone.utc)
        return TeacherDataBundle(
            classes=classes,
            students=students,
            classes_with_students=classes_with_students,
            dashboard=dashboard,
            profile=profile,
            last_updated=now.isoformat(),
            expires_at=(now + timedelta(seconds=self.ttl)).isoformat(),
        )
