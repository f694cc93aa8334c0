"""Teacher data orchestrator - parallel loads with per-domain state."""

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import replace
from functools import partial

from loguru import logger

from app.errors import LoadSkipped
from app.models import ANONYMOUS, DomainKey, DomainState, Identity, Role, StorageSnapshot
from app.services.teacher_data.service import Batch, TeacherDataService
from app.tasks import DetachedTasks
from settings import QUALIFYING_ROLE

Listener = Callable[[DomainKey, DomainState], None]


class TeacherDataOrchestrator:
    """Drives loads for the signed-in teacher and holds what the UI shows.

    Each domain has its own ``DomainState``; a load only ever touches the
    state of its own domain and listeners are told as soon as that domain
    finishes. Nothing loads unless the identity is authenticated with the
    qualifying role. Losing the role empties every state; loads issued
    before that no longer update it, fetch or write to the cache.
    """

    def __init__(
        self,
        service: TeacherDataService,
        tasks: DetachedTasks,
        role: Role = Role(QUALIFYING_ROLE),
        domains: Iterable[DomainKey] = tuple(DomainKey),
    ):
        self.service = service
        self._tasks = tasks
        self._role = role
        self._domains = tuple(domains)
        self._identity = ANONYMOUS
        self._generation = 0
        self._states = {k: DomainState() for k in self._domains}
        self._listeners: list[Listener] = []
        self.cache_validity: dict[DomainKey, bool] = {k: False for k in self._domains}
        self.storage_snapshot: StorageSnapshot | None = None

    @property
    def identity(self) -> Identity:
        return self._identity

    @property
    def is_active(self) -> bool:
        return self._identity.has_role(self._role)

    @property
    def domains(self) -> tuple[DomainKey, ...]:
        return self._domains

    @property
    def states(self) -> dict[DomainKey, DomainState]:
        return dict(self._states)

    def state(self, key: DomainKey) -> DomainState:
        return self._states[key]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register for state changes; returns an unsubscribe callable."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _publish(self, key: DomainKey, state: DomainState) -> None:
        self._states[key] = state
        for listener in list(self._listeners):
            listener(key, state)

    def set_identity(self, identity: Identity, autoload: bool = True) -> asyncio.Task | None:
        """React to a sign-in, sign-out or role change.

        Entering the qualifying state schedules ``load_all`` (unless
        ``autoload`` is off) and returns its task; leaving it clears all
        state at once.
        """
        was_active = self.is_active
        self._identity = identity
        if self.is_active and not was_active and autoload:
            logger.info("Teacher signed in, loading data")
            return self._tasks.spawn(self.load_all(), name="load-teacher-data")
        if was_active and not self.is_active:
            logger.info("Teacher role lost, clearing data")
            self.reset()
        return None

    def reset(self) -> None:
        """Empty every domain and drop results of loads still in flight."""
        self._generation += 1
        self.cache_validity = {k: False for k in self._domains}
        self.storage_snapshot = None
        for key in self._domains:
            self._publish(key, DomainState())

    def _is_current(self, generation: int) -> bool:
        return self.is_active and generation == self._generation

    async def load_one(self, key: DomainKey, force_refresh: bool = False, batch: Batch | None = None) -> None:
        if not self.is_active:
            return
        generation = self._generation
        log = logger.bind(domain=key.value)
        self._publish(key, replace(self._states[key], is_loading=True, error=None))

        try:
            value = await self.service.load(key, force_refresh, partial(self._is_current, generation), batch)
        except LoadSkipped:
            log.debug("Load of {} abandoned after reset", key.label)
            return
        except Exception as e:
            if generation != self._generation:
                return
            message = str(e) or f"Failed to load {key.label}"
            log.error("Error loading {}: {}", key.label, message)
            self._publish(key, replace(self._states[key], is_loading=False, error=message))
            return

        if generation != self._generation:
            log.debug("Discarding {} loaded before reset", key.label)
            return
        self._publish(key, replace(self._states[key], value=value, is_loading=False, error=None))

    async def load_all(self) -> None:
        """Load every domain concurrently, plus cache diagnostics.

        Each domain is fetched at most once, including the inputs of the
        joined domain.
        """
        if not self.is_active:
            return
        batch: Batch = {}
        await asyncio.gather(
            *(self.load_one(k, batch=batch) for k in self._domains),
            self.refresh_cache_info(),
        )

    async def refresh(self, key: DomainKey) -> None:
        await self.load_one(key, force_refresh=True)

    async def refresh_all(self) -> None:
        if not self.is_active:
            return
        batch: Batch = {}
        await asyncio.gather(*(self.load_one(k, True, batch) for k in self._domains))

    async def refresh_cache_info(self) -> None:
        """Update ``cache_validity`` and ``storage_snapshot``; errors are logged."""
        if not self.is_active:
            return
        generation = self._generation
        try:
            validity = await self.service.has_valid_data()
            snapshot = await self.service.snapshot()
        except Exception as e:
            logger.error("Error loading cache info: {}", e)
            return
        if generation != self._generation:
            return
        self.cache_validity = {k: validity[k] for k in self._domains}
        self.storage_snapshot = snapshot
