"""Group repository port."""

from typing import Protocol
from uuid import UUID

from resauthz.domain.entities import Group


class GroupRepository(Protocol):
    """Port for group persistence."""

    async def get_by_id(self, group_id: UUID) -> Group | None: ...

    async def list_all(self, offset: int = 0, limit: int = 30) -> list[Group]: ...

    async def create(self, group: Group) -> Group: ...

    async def delete(self, group_id: UUID) -> None: ...
