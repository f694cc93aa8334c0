"""Key-value cache table and the entry envelope stored in it."""

import json
from dataclasses import dataclass
from typing import Any

from app.models.common.base import BaseEntity

STORE_DDL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key VARCHAR PRIMARY KEY,
    value VARCHAR NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""


@dataclass
class CacheEntry(BaseEntity):
    """Stored value with its write time (epoch seconds) and ttl (seconds)."""

    data: Any
    written_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        # Non-positive ttl never yields a live entry, even at elapsed == 0
        return self.ttl <= 0 or now - self.written_at > self.ttl

    def remaining(self, now: float) -> float:
        return max(0.0, self.ttl - (now - self.written_at))

    def dumps(self) -> str:
        return json.dumps(self.to_dict(by_alias=True))

    @classmethod
    def loads(cls, raw: str) -> "CacheEntry":
        """Decode a stored entry; raises ValueError/KeyError/TypeError if malformed."""
        obj = json.loads(raw)
        return cls(data=obj["data"], written_at=float(obj["writtenAt"]), ttl=float(obj["ttl"]))
