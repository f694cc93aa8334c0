"""Common repositories - shared storage."""

from app.repositories.common.store import DAY, ExpiringStore

__all__ = [
    "DAY",
    "ExpiringStore",
]
