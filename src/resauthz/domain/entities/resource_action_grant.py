"""Resource action grant entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from resauthz.domain.value_objects import MANAGE_ACTION, GrantHolder


@dataclass
class ResourceActionGrant:
    """Grant - holder may perform action on resource."""

    id: UUID
    resource_id: UUID
    action: str
    holder: GrantHolder
    created_at: datetime

    @property
    def is_manage(self) -> bool:
        return self.action == MANAGE_ACTION
