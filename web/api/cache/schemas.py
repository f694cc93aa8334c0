"""Cache diagnostics response schemas."""

from pydantic import BaseModel


class CacheStatusItem(BaseModel):
    """Cache state of one domain."""

    domain: str
    storage_key: str
    valid: bool
    remaining_seconds: float | None


class CacheStatusResponse(BaseModel):
    """Cache state of all domains."""

    items: list[CacheStatusItem]
    ttl_seconds: float


class StorageSnapshotResponse(BaseModel):
    """Keys under the cache namespace and their size."""

    keys: list[str]
    total_size_bytes: int


class DomainStateResponse(BaseModel):
    """What the UI currently shows for a domain."""

    domain: str
    is_loading: bool
    error: str | None
    has_value: bool
    item_count: int | None
