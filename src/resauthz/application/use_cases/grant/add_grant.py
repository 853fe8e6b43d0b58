"""Add resource action grant use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from resauthz.application.ports import UnitOfWorkFactory
from resauthz.application.services import AvailableActionsRegistry
from resauthz.application.use_cases.resource.resource_keys import (
    get_or_create_resource,
    validate_resource_key,
)
from resauthz.domain.entities import ResourceActionGrant
from resauthz.domain.exceptions import GrantInvalid, ResourceNotFound
from resauthz.domain.value_objects import (
    MANAGE_ACTION,
    DynamicGroupHolder,
    GrantHolder,
    GroupHolder,
    UserHolder,
)

logger = logging.getLogger(__name__)


def validate_grant(
    action_registry: AvailableActionsRegistry,
    resource_class: str,
    resource_identifier: str | None,
    action: str,
    holder: GrantHolder,
) -> None:
    """Raise GrantInvalid for a malformed grant. Does not touch the store."""
    validate_resource_key(resource_class, resource_identifier)
    if not action:
        raise GrantInvalid("'action' is required")
    if not isinstance(holder, GrantHolder):
        raise GrantInvalid("exactly one of user, group or dynamic group must be the grant holder")
    if isinstance(holder, UserHolder) and not holder.user_identifier:
        raise GrantInvalid("'user_identifier' of the grant holder must not be empty")
    if isinstance(holder, DynamicGroupHolder) and not holder.dynamic_group_identifier:
        raise GrantInvalid("'dynamic_group_identifier' of the grant holder must not be empty")

    if action == MANAGE_ACTION:
        return
    available = action_registry.lookup(resource_class)
    if available is not None and action not in available.catalog_for(resource_identifier):
        raise GrantInvalid(
            f"action '{action}' is not available for "
            f"{'collection' if resource_identifier is None else 'item'} "
            f"resources of class '{resource_class}'"
        )


class AddGrantUseCase:
    """Grant an action on a resource to a user, group or dynamic group."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        action_registry: AvailableActionsRegistry,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._registry = action_registry

    async def execute(
        self,
        resource_class: str,
        resource_identifier: str | None,
        action: str,
        holder: GrantHolder,
        create_resource: bool = True,
    ) -> ResourceActionGrant:
        """Add grant. The resource is created on first use unless create_resource is False."""
        validate_grant(self._registry, resource_class, resource_identifier, action, holder)

        async with self._uow_factory() as uow:
            if isinstance(holder, GroupHolder) and not await uow.groups.get_by_id(holder.group_id):
                raise GrantInvalid(f"group '{holder.group_id}' does not exist")

            if create_resource:
                resource, _ = await get_or_create_resource(
                    uow, resource_class, resource_identifier
                )
            else:
                resource = await uow.resources.get_by_class_and_identifier(
                    resource_class, resource_identifier
                )
                if resource is None:
                    raise ResourceNotFound(resource_class, resource_identifier)

            grant = ResourceActionGrant(
                id=uuid4(),
                resource_id=resource.id,
                action=action,
                holder=holder,
                created_at=datetime.now(UTC),
            )
            await uow.grants.create(grant)

        logger.info(
            "granted %s on %s/%s to %s", action, resource_class, resource_identifier, holder
        )
        return grant
