"""Teacher data models - domain keys, identity, load state."""

from app.models.teacher.domain import (
    ANONYMOUS,
    BASE_DOMAINS,
    STORAGE_KEYS,
    DomainKey,
    Identity,
    Role,
)
from app.models.teacher.state import (
    DomainState,
    StorageSnapshot,
    TeacherDataBundle,
)

__all__ = [
    "DomainKey",
    "STORAGE_KEYS",
    "BASE_DOMAINS",
    "Role",
    "Identity",
    "ANONYMOUS",
    "DomainState",
    "StorageSnapshot",
    "TeacherDataBundle",
]
