"""Application settings."""

import os
from pathlib import Path

# Cache storage
CACHE_PATH = os.getenv("ATTENDANCE_CACHE_PATH", "attendance_cache.duckdb")
CACHE_TTL_DAYS = int(os.getenv("CACHE_TTL_DAYS", "10"))
CACHE_NAMESPACE = os.getenv("CACHE_NAMESPACE", "teacher_")

# Logging
LOG_DIR = Path(os.getenv("ATTENDANCE_LOG_DIR", "logs"))

# API
API_BASE_URL = os.getenv("ATTENDANCE_API_URL", "http://localhost:8000/api")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "30"))

# Sync
MAX_CONCURRENT = int(os.getenv("MAX_CONCURRENT", "10"))
QUALIFYING_ROLE = os.getenv("QUALIFYING_ROLE", "teacher")
