"""In-memory load state and diagnostic views."""

from dataclasses import dataclass, field
from typing import Any

from app.models.common import BaseEntity


@dataclass
class DomainState(BaseEntity):
    """Per-domain value with its loading flag and last error."""

    value: Any = None
    is_loading: bool = False
    error: str | None = None


@dataclass
class StorageSnapshot(BaseEntity):
    """Keys under the cache namespace and their serialized size."""

    keys: list[str] = field(default_factory=list)
    total_size_bytes: int = 0


@dataclass
class TeacherDataBundle(BaseEntity):
    """Result of a full preload."""

    classes: list[dict]
    students: list[dict]
    classes_with_students: list[dict]
    dashboard: Any
    profile: Any
    last_updated: str
    expires_at: str
