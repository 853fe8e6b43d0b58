"""Group member repository port - edge table of the group graph."""

from typing import Protocol
from uuid import UUID

from resauthz.domain.entities import GroupMember


class GroupMemberRepository(Protocol):
    """Port for group member persistence and index-based edge lookups."""

    async def get_by_id(self, member_id: UUID) -> GroupMember | None: ...

    async def list_by_group(
        self, group_id: UUID, offset: int = 0, limit: int = 30
    ) -> list[GroupMember]: ...

    async def list_child_group_ids(self, group_id: UUID) -> list[UUID]: ...

    async def list_parent_group_ids(self, group_id: UUID) -> list[UUID]: ...

    async def list_group_ids_for_user(self, user_identifier: str) -> list[UUID]: ...

    async def has_user_member(self, group_id: UUID, user_identifier: str) -> bool: ...

    async def create(self, member: GroupMember) -> GroupMember: ...

    async def delete(self, member_id: UUID) -> None: ...

    async def delete_by_group(self, group_id: UUID) -> None: ...
