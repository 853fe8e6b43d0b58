"""Remove group member use case."""

import logging
from uuid import UUID

from resauthz.application.ports import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class RemoveGroupMemberUseCase:
    """Remove one membership edge."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, member_id: UUID) -> bool:
        """Returns False if the member does not exist."""
        async with self._uow_factory() as uow:
            member = await uow.group_members.get_by_id(member_id)
            if member is None:
                return False
            await uow.group_members.delete(member_id)

        logger.info("removed %s from group %s", member.member, member.group_id)
        return True
