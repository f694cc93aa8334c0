"""Cache diagnostics API."""

from web.api.cache.views import get_cache_status, get_domain_state, get_storage_snapshot, refresh_domain

__all__ = [
    "get_cache_status",
    "get_storage_snapshot",
    "get_domain_state",
    "refresh_domain",
]
