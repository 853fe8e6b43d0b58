"""Grant query criteria DTOs."""

from dataclasses import dataclass, field
from uuid import UUID

from resauthz.domain.entities import AuthorizationResource, ResourceActionGrant
from resauthz.domain.value_objects import (
    DynamicGroupHolder,
    GrantHolder,
    GroupHolder,
    ResourceIdentifierFilter,
    UserHolder,
)


@dataclass(frozen=True)
class HolderCriteria:
    """Grant holder criteria, OR-combined.

    Empty criteria match no holder at all. Use ``GrantCriteria.holder = None``
    to not filter on the holder.
    """

    user_identifier: str | None = None
    group_ids: frozenset[UUID] = field(default_factory=frozenset)
    dynamic_group_identifiers: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return (
            self.user_identifier is None
            and not self.group_ids
            and not self.dynamic_group_identifiers
        )

    def matches(self, holder: GrantHolder) -> bool:
        match holder:
            case UserHolder(user_identifier=user_identifier):
                return self.user_identifier is not None and user_identifier == self.user_identifier
            case GroupHolder(group_id=group_id):
                return group_id in self.group_ids
            case DynamicGroupHolder(dynamic_group_identifier=identifier):
                return identifier in self.dynamic_group_identifiers
        return False


@dataclass(frozen=True)
class GrantCriteria:
    """Filter for grant and resource queries. ``None`` fields are not filtered on.

    ``resource_identifier`` is a concrete identifier, ``None`` for the collection
    resource (same as IS_NULL) or a ResourceIdentifierFilter sentinel.
    """

    resource_class: str | None = None
    resource_identifier: str | ResourceIdentifierFilter | None = ResourceIdentifierFilter.ANY
    resource_ids: frozenset[UUID] | None = None
    actions: frozenset[str] | None = None
    holder: HolderCriteria | None = None

    def matches_resource(self, resource: AuthorizationResource) -> bool:
        if self.resource_class is not None and resource.resource_class != self.resource_class:
            return False
        if self.resource_ids is not None and resource.id not in self.resource_ids:
            return False
        match self.resource_identifier:
            case ResourceIdentifierFilter.ANY:
                return True
            case None | ResourceIdentifierFilter.IS_NULL:
                return resource.resource_identifier is None
            case ResourceIdentifierFilter.IS_NOT_NULL:
                return resource.resource_identifier is not None
        return resource.resource_identifier == self.resource_identifier

    def matches(self, grant: ResourceActionGrant, resource: AuthorizationResource) -> bool:
        if grant.resource_id != resource.id or not self.matches_resource(resource):
            return False
        if self.actions is not None and grant.action not in self.actions:
            return False
        return self.holder is None or self.holder.matches(grant.holder)
