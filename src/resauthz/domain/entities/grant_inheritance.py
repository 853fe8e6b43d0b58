"""Grant inheritance entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class GrantInheritance:
    """Any grant on the source resource makes the target's resource class visible."""

    id: UUID
    source_resource_id: UUID
    target_resource_id: UUID
