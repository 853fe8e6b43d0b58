"""Remove resource action grants in bulk."""

import logging

from resauthz.application.dto import GrantCriteria
from resauthz.application.ports import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class RemoveGrantsUseCase:
    """Remove all grants matching the criteria, e.g. all grants of one resource."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, criteria: GrantCriteria) -> int:
        """Returns the number of removed grants."""
        async with self._uow_factory() as uow:
            removed = await uow.grants.delete_matching(criteria)

        if removed:
            logger.info("removed %d grant(s) matching %s", removed, criteria)
        return removed
