"""Remove group use case."""

import logging
from uuid import UUID

from resauthz.application.ports import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class RemoveGroupUseCase:
    """Remove a group, its memberships (as parent and as child) and the grants it holds."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, group_id: UUID) -> bool:
        """Returns False if the group does not exist."""
        async with self._uow_factory() as uow:
            group = await uow.groups.get_by_id(group_id)
            if group is None:
                return False
            removed_grants = await uow.grants.delete_by_group(group_id)
            await uow.group_members.delete_by_group(group_id)
            await uow.groups.delete(group_id)

        logger.info("removed group %s with %d grant(s)", group_id, removed_grants)
        return True
