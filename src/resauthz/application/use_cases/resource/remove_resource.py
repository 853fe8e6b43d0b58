"""Remove resource use case."""

import logging
from collections.abc import Collection

from resauthz.application.ports import UnitOfWork, UnitOfWorkFactory
from resauthz.domain.entities import AuthorizationResource

logger = logging.getLogger(__name__)


class RemoveResourceUseCase:
    """Remove resources together with their grants and grant inheritance edges."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, resource_class: str, resource_identifier: str | None) -> bool:
        """Remove one resource. Returns False if it does not exist."""
        async with self._uow_factory() as uow:
            resource = await uow.resources.get_by_class_and_identifier(
                resource_class, resource_identifier
            )
            if resource is None:
                return False
            await self._remove(uow, [resource])
        return True

    async def execute_many(
        self, resource_class: str, resource_identifiers: Collection[str] | None = None
    ) -> int:
        """Remove resources of a class by identifier, or all of them if identifiers is None."""
        async with self._uow_factory() as uow:
            resources = await uow.resources.list_by_class_and_identifiers(
                resource_class, resource_identifiers
            )
            await self._remove(uow, resources)
        return len(resources)

    async def _remove(self, uow: UnitOfWork, resources: list[AuthorizationResource]) -> None:
        if not resources:
            return
        resource_ids = [resource.id for resource in resources]
        removed_grants = await uow.grants.delete_by_resource_ids(resource_ids)
        await uow.grant_inheritances.delete_by_resource_ids(resource_ids)
        await uow.resources.delete(resource_ids)
        logger.info(
            "removed %d resource(s) of class %s with %d grant(s)",
            len(resource_ids),
            resources[0].resource_class,
            removed_grants,
        )
