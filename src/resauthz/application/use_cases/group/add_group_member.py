"""Add group member use case."""

import logging
from uuid import UUID, uuid4

from resauthz.application.ports import UnitOfWorkFactory
from resauthz.application.services import GroupGraph
from resauthz.domain.entities import GroupMember
from resauthz.domain.exceptions import GroupMemberInvalid
from resauthz.domain.value_objects import ChildGroupMember, GroupMemberHolder, UserMember

logger = logging.getLogger(__name__)


class AddGroupMemberUseCase:
    """Add a user or a child group to a group, keeping the group graph acyclic."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, group_id: UUID, member: GroupMemberHolder) -> GroupMember:
        """Add member. Raises GroupMemberInvalid and leaves the graph unchanged on any violation."""
        if not isinstance(member, GroupMemberHolder):
            raise GroupMemberInvalid("exactly one of user or child group must be the member")
        if isinstance(member, UserMember) and not member.user_identifier:
            raise GroupMemberInvalid("'user_identifier' of the member must not be empty")

        async with self._uow_factory() as uow:
            if not await uow.groups.get_by_id(group_id):
                raise GroupMemberInvalid(f"group '{group_id}' does not exist")

            if isinstance(member, ChildGroupMember):
                if not await uow.groups.get_by_id(member.child_group_id):
                    raise GroupMemberInvalid(
                        f"child group '{member.child_group_id}' does not exist"
                    )
                disallowed = await GroupGraph(uow.group_members).disallowed_child_group_ids_for(
                    group_id
                )
                if member.child_group_id in disallowed:
                    raise GroupMemberInvalid(
                        f"group '{member.child_group_id}' is not allowed as child of '{group_id}': "
                        "it is the group itself, an ancestor or already a descendant"
                    )

            group_member = GroupMember(id=uuid4(), group_id=group_id, member=member)
            await uow.group_members.create(group_member)

        logger.info("added %s to group %s", member, group_id)
        return group_member
