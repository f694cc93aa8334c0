"""Common models - base classes and shared tables."""

from app.models.common.base import BaseEntity
from app.models.common.cache import STORE_DDL, CacheEntry

__all__ = [
    "BaseEntity",
    "CacheEntry",
    "STORE_DDL",
]
