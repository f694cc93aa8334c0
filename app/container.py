"""Dependency Injection container - built once per session and passed around."""

import asyncio
import time
from collections.abc import Callable, Mapping

import duckdb
import httpx
from loguru import logger

from app.models import ANONYMOUS, DomainKey, Identity
from app.repositories import DAY, ExpiringStore, connect
from app.services.teacher_data import Fetcher, TeacherApi, TeacherDataOrchestrator, TeacherDataService
from app.tasks import DetachedTasks
from settings import API_BASE_URL, CACHE_NAMESPACE, CACHE_PATH, CACHE_TTL_DAYS


class Container:
    """Session container - owns the cache DB, API client and data services.

    Use as ``async with build_container(...) as c``; leaving the block waits
    for detached work and closes the HTTP client and the database.
    """

    def __init__(
        self,
        conn: duckdb.DuckDBPyConnection,
        tasks: DetachedTasks,
        store: ExpiringStore,
        api: TeacherApi,
        service: TeacherDataService,
        orchestrator: TeacherDataOrchestrator,
    ):
        self.conn = conn
        self.tasks = tasks
        self.store = store
        self.api = api
        self.service = service
        self.orchestrator = orchestrator

    async def __aenter__(self):
        await self.api.__aenter__()
        return self

    async def __aexit__(self, *exc):
        await self.tasks.drain()
        await self.api.__aexit__(*exc)
        self.conn.close()
        logger.debug("Container closed")

    def sign_in(self, token: str, identity: Identity, autoload: bool = True) -> asyncio.Task | None:
        """Use ``token`` for API calls and start loading if the role qualifies."""
        self.api.set_token(token)
        return self.orchestrator.set_identity(identity, autoload)

    def sign_out(self) -> asyncio.Task:
        """Drop the identity and clear cached teacher data in the background."""
        self.orchestrator.set_identity(ANONYMOUS)
        self.api.set_token(None)
        return self.service.clear_all_detached()


def build_container(
    cache_path: str = CACHE_PATH,
    base_url: str = API_BASE_URL,
    token: str | None = None,
    ttl: float = CACHE_TTL_DAYS * DAY,
    namespace: str = CACHE_NAMESPACE,
    single_flight: bool = False,
    clock: Callable[[], float] = time.time,
    transport: httpx.AsyncBaseTransport | None = None,
    fetchers: Mapping[DomainKey, Fetcher] | None = None,
) -> Container:
    """Wire store, API client, service and orchestrator.

    ``fetchers`` replaces the HTTP-backed fetchers when given.
    """
    conn = connect(cache_path)
    tasks = DetachedTasks()
    store = ExpiringStore(conn, tasks, ttl=ttl, namespace=namespace, clock=clock)
    api = TeacherApi(base_url, token, transport=transport)
    service = TeacherDataService(
        store=store,
        fetchers=fetchers if fetchers is not None else api.fetchers(),
        tasks=tasks,
        single_flight=single_flight,
    )
    orchestrator = TeacherDataOrchestrator(service=service, tasks=tasks)
    logger.info("Container ready: cache={}, api={}", cache_path, base_url)
    return Container(conn, tasks, store, api, service, orchestrator)
