"""Resource action grant repository port."""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from resauthz.application.dto import GrantCriteria
from resauthz.domain.entities import ResourceActionGrant


class GrantRepository(Protocol):
    """Port for resource action grant persistence.

    ``find`` orders by resource creation order, then grant creation order.
    """

    async def get_by_id(self, grant_id: UUID) -> ResourceActionGrant | None: ...

    async def find(
        self, criteria: GrantCriteria, offset: int = 0, limit: int = 1024
    ) -> list[ResourceActionGrant]: ...

    async def count(self, criteria: GrantCriteria) -> int: ...

    async def create(self, grant: ResourceActionGrant) -> ResourceActionGrant: ...

    async def delete(self, grant_id: UUID) -> None: ...

    async def delete_matching(self, criteria: GrantCriteria) -> int: ...

    async def delete_by_resource_ids(self, resource_ids: Collection[UUID]) -> int: ...

    async def delete_by_group(self, group_id: UUID) -> int: ...
