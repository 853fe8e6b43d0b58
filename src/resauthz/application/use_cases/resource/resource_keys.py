"""Resource key validation and lookup shared by the grant and resource use cases."""

from datetime import UTC, datetime
from uuid import uuid4

from resauthz.application.ports import UnitOfWork
from resauthz.domain.entities import AuthorizationResource
from resauthz.domain.exceptions import GrantInvalid
from resauthz.domain.value_objects import RESOURCE_KEY_SEPARATOR


def validate_resource_key(resource_class: str, resource_identifier: str | None) -> None:
    """Raise GrantInvalid for an empty class or identifier, or one containing the separator."""
    if not resource_class:
        raise GrantInvalid("'resource_class' is required")
    if RESOURCE_KEY_SEPARATOR in resource_class:
        raise GrantInvalid(
            f"'resource_class' must not contain '{RESOURCE_KEY_SEPARATOR}': {resource_class}"
        )
    if resource_identifier is None:
        return
    if not resource_identifier:
        raise GrantInvalid("'resource_identifier' must not be empty")
    if RESOURCE_KEY_SEPARATOR in resource_identifier:
        raise GrantInvalid(
            f"'resource_identifier' must not contain '{RESOURCE_KEY_SEPARATOR}': "
            f"{resource_identifier}"
        )


async def get_or_create_resource(
    uow: UnitOfWork, resource_class: str, resource_identifier: str | None
) -> tuple[AuthorizationResource, bool]:
    """Return (resource, created)."""
    resource = await uow.resources.get_by_class_and_identifier(resource_class, resource_identifier)
    if resource is not None:
        return resource, False
    resource = AuthorizationResource(
        id=uuid4(),
        resource_class=resource_class,
        resource_identifier=resource_identifier,
        created_at=datetime.now(UTC),
    )
    await uow.resources.create(resource)
    return resource, True
