"""Add grant inheritance use case."""

from uuid import uuid4

from resauthz.application.ports import UnitOfWorkFactory
from resauthz.application.use_cases.resource.resource_keys import (
    get_or_create_resource,
    validate_resource_key,
)
from resauthz.domain.entities import GrantInheritance
from resauthz.domain.exceptions import GrantInvalid


class AddGrantInheritanceUseCase:
    """Let any grant on the source resource make the target's resource class visible."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        source_resource_class: str,
        source_resource_identifier: str | None,
        target_resource_class: str,
        target_resource_identifier: str | None,
    ) -> GrantInheritance:
        """Create the edge (and missing resources). Idempotent."""
        validate_resource_key(source_resource_class, source_resource_identifier)
        validate_resource_key(target_resource_class, target_resource_identifier)
        if (source_resource_class, source_resource_identifier) == (
            target_resource_class,
            target_resource_identifier,
        ):
            raise GrantInvalid("a resource cannot inherit grants from itself")

        async with self._uow_factory() as uow:
            source, _ = await get_or_create_resource(
                uow, source_resource_class, source_resource_identifier
            )
            target, _ = await get_or_create_resource(
                uow, target_resource_class, target_resource_identifier
            )
            existing = await uow.grant_inheritances.get(source.id, target.id)
            if existing:
                return existing

            inheritance = GrantInheritance(
                id=uuid4(),
                source_resource_id=source.id,
                target_resource_id=target.id,
            )
            await uow.grant_inheritances.create(inheritance)
            return inheritance
