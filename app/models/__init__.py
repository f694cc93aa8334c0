"""Models package - DDL and entities for the cache and teacher domains."""

from app.models.common import STORE_DDL, BaseEntity, CacheEntry
from app.models.teacher import (
    ANONYMOUS,
    BASE_DOMAINS,
    STORAGE_KEYS,
    DomainKey,
    DomainState,
    Identity,
    Role,
    StorageSnapshot,
    TeacherDataBundle,
)

ALL_DDL = [
    STORE_DDL,
]

__all__ = [
    # Common
    "BaseEntity",
    "CacheEntry",
    "STORE_DDL",
    # Teacher
    "DomainKey",
    "STORAGE_KEYS",
    "BASE_DOMAINS",
    "Role",
    "Identity",
    "ANONYMOUS",
    "DomainState",
    "StorageSnapshot",
    "TeacherDataBundle",
    # All DDL
    "ALL_DDL",
]
