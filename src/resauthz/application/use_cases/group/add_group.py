"""Add group use case."""

import logging
from uuid import uuid4

from resauthz.application.ports import UnitOfWorkFactory
from resauthz.domain.entities import Group
from resauthz.domain.exceptions import GroupInvalid

logger = logging.getLogger(__name__)


class AddGroupUseCase:
    """Create a persisted group."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, name: str) -> Group:
        if not name or not name.strip():
            raise GroupInvalid("'name' is required")

        group = Group(id=uuid4(), name=name.strip())
        async with self._uow_factory() as uow:
            await uow.groups.create(group)

        logger.info("added group %s (%s)", group.id, group.name)
        return group
