"""Repositories package - local cache storage."""

from app.repositories.base import BaseRepository
from app.repositories.common import DAY, ExpiringStore
from app.repositories.db import MEMORY, connect, db_exists, init_tables

__all__ = [
    # DB
    "MEMORY",
    "connect",
    "db_exists",
    "init_tables",
    # Base
    "BaseRepository",
    # Common
    "DAY",
    "ExpiringStore",
]
