"""Cache diagnostics views - thin layer over the orchestrator."""

import asyncio

from app.models import DomainKey
from app.services.teacher_data import TeacherDataOrchestrator
from web.api.errors import parse_domain, require_tracked

from .schemas import CacheStatusItem, CacheStatusResponse, DomainStateResponse, StorageSnapshotResponse


async def get_cache_status(orchestrator: TeacherDataOrchestrator) -> CacheStatusResponse:
    """Validity and remaining ttl per domain. Never fetches."""
    service = orchestrator.service
    validity, remaining = await asyncio.gather(service.has_valid_data(), service.remaining_ttls())

    items = [
        CacheStatusItem(
            domain=key.value,
            storage_key=key.storage_key,
            valid=validity[key],
            remaining_seconds=remaining[key],
        )
        for key in DomainKey
    ]
    return CacheStatusResponse(items=items, ttl_seconds=service.ttl)


async def get_storage_snapshot(orchestrator: TeacherDataOrchestrator) -> StorageSnapshotResponse:
    """Namespaced keys and their total size."""
    snapshot = await orchestrator.service.snapshot()
    return StorageSnapshotResponse(
        keys=snapshot.keys,
        total_size_bytes=snapshot.total_size_bytes,
    )


def get_domain_state(orchestrator: TeacherDataOrchestrator, domain: str) -> DomainStateResponse:
    """Current in-memory state of a domain."""
    key = parse_domain(domain)
    require_tracked(key, orchestrator.domains)
    state = orchestrator.state(key)
    return DomainStateResponse(
        domain=key.value,
        is_loading=state.is_loading,
        error=state.error,
        has_value=state.value is not None,
        item_count=len(state.value) if isinstance(state.value, list) else None,
    )


async def refresh_domain(orchestrator: TeacherDataOrchestrator, domain: str) -> DomainStateResponse:
    """Force-refresh a domain and return its resulting state."""
    key = parse_domain(domain)
    require_tracked(key, orchestrator.domains)
    await orchestrator.refresh(key)
    return get_domain_state(orchestrator, domain)
