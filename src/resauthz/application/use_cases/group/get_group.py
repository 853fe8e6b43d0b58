"""Group query use cases."""

from uuid import UUID

from resauthz.application.ports import UnitOfWorkFactory
from resauthz.application.services.action_resolution import DEFAULT_PAGE_SIZE, clamp_limit
from resauthz.domain.entities import Group, GroupMember


class GetGroupUseCase:
    """Get a group or a group member by id."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, group_id: UUID) -> Group | None:
        async with self._uow_factory() as uow:
            return await uow.groups.get_by_id(group_id)

    async def get_member(self, member_id: UUID) -> GroupMember | None:
        async with self._uow_factory() as uow:
            return await uow.group_members.get_by_id(member_id)


class ListGroupsUseCase:
    """List groups, paginated."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, offset: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> list[Group]:
        async with self._uow_factory() as uow:
            return await uow.groups.list_all(max(0, offset), clamp_limit(limit))

    async def members(
        self, group_id: UUID, offset: int = 0, limit: int = DEFAULT_PAGE_SIZE
    ) -> list[GroupMember]:
        """Direct members of a group."""
        async with self._uow_factory() as uow:
            return await uow.group_members.list_by_group(
                group_id, max(0, offset), clamp_limit(limit)
            )
