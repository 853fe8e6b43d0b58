"""Add resource use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from resauthz.application.dto import GrantCriteria, HolderCriteria
from resauthz.application.ports import UnitOfWorkFactory
from resauthz.application.use_cases.resource.resource_keys import (
    get_or_create_resource,
    validate_resource_key,
)
from resauthz.domain.entities import ResourceActionGrant
from resauthz.domain.exceptions import GrantInvalid
from resauthz.domain.value_objects import MANAGE_ACTION, UserHolder

logger = logging.getLogger(__name__)


class AddResourceUseCase:
    """Register a resource and give its creator the manage grant."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        resource_class: str,
        resource_identifier: str | None,
        user_identifier: str | None,
    ) -> ResourceActionGrant:
        """Create the resource and the manage grant for the user, if missing. Returns the grant."""
        validate_resource_key(resource_class, resource_identifier)
        if not user_identifier:
            raise GrantInvalid("a user identifier is required to register a resource")

        async with self._uow_factory() as uow:
            resource, created = await get_or_create_resource(
                uow, resource_class, resource_identifier
            )
            existing = await uow.grants.find(
                GrantCriteria(
                    resource_ids=frozenset({resource.id}),
                    actions=frozenset({MANAGE_ACTION}),
                    holder=HolderCriteria(user_identifier=user_identifier),
                ),
                limit=1,
            )
            if existing:
                return existing[0]
            grant = ResourceActionGrant(
                id=uuid4(),
                resource_id=resource.id,
                action=MANAGE_ACTION,
                holder=UserHolder(user_identifier),
                created_at=datetime.now(UTC),
            )
            await uow.grants.create(grant)

        logger.info(
            "resource %s/%s registered (new=%s), manage granted to %s",
            resource_class,
            resource_identifier,
            created,
            user_identifier,
        )
        return grant
