"""Authorization resource entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class AuthorizationResource:
    """Protected resource - a resource class plus identifier, or the class's collection."""

    id: UUID
    resource_class: str
    resource_identifier: str | None
    created_at: datetime

    @property
    def is_collection(self) -> bool:
        return self.resource_identifier is None
