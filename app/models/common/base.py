"""Base entity class for all domain entities."""

from dataclasses import asdict, dataclass
from typing import Any


def camel(name: str) -> str:
    """``written_at`` -> ``writtenAt``."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass
class BaseEntity:
    """Base class for all entities."""

    def to_dict(self, by_alias: bool = False) -> dict[str, Any]:
        """Convert entity to dictionary; ``by_alias`` gives the camelCase keys used on disk."""
        data = asdict(self)
        if by_alias:
            return {camel(k): v for k, v in data.items()}
        return data
