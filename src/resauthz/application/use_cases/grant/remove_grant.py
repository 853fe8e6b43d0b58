"""Remove resource action grant use case."""

import logging
from uuid import UUID

from resauthz.application.ports import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class RemoveGrantUseCase:
    """Remove a single grant by id."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, grant_id: UUID) -> bool:
        """Returns False (and changes nothing) if the grant does not exist."""
        async with self._uow_factory() as uow:
            grant = await uow.grants.get_by_id(grant_id)
            if grant is None:
                return False
            await uow.grants.delete(grant.id)

        logger.info("removed grant %s (%s to %s)", grant.id, grant.action, grant.holder)
        return True
