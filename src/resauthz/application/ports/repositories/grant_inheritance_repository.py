"""Grant inheritance repository port."""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from resauthz.application.dto import GrantCriteria
from resauthz.domain.entities import GrantInheritance


class GrantInheritanceRepository(Protocol):
    """Port for grant inheritance persistence."""

    async def get(
        self, source_resource_id: UUID, target_resource_id: UUID
    ) -> GrantInheritance | None: ...

    async def list_target_resource_classes(self, source_criteria: GrantCriteria) -> set[str]: ...

    async def create(self, inheritance: GrantInheritance) -> GrantInheritance: ...

    async def delete(self, inheritance_id: UUID) -> None: ...

    async def delete_by_resource_ids(self, resource_ids: Collection[UUID]) -> None: ...
