"""Group entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Group:
    """Persisted group of users and child groups."""

    id: UUID
    name: str
