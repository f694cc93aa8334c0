"""DuckDB connection management for the local cache."""

from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import CACHE_PATH

MEMORY = ":memory:"


def db_exists(path: str = CACHE_PATH) -> bool:
    """Check if database file exists."""
    return path == MEMORY or Path(path).exists()


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.debug("Cache tables initialized")


def connect(path: str = CACHE_PATH) -> duckdb.DuckDBPyConnection:
    """Open the cache database, creating file and tables when missing."""
    if not db_exists(path):
        logger.warning("Cache DB not found: {}. Creating empty DB.", path)
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = duckdb.connect(path)
    init_tables(conn)
    logger.debug("Cache DB connected: {}", path)
    return conn
