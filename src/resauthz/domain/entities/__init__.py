"""Domain entities."""

from resauthz.domain.entities.authorization_resource import AuthorizationResource
from resauthz.domain.entities.dynamic_group import DynamicGroup
from resauthz.domain.entities.grant_inheritance import GrantInheritance
from resauthz.domain.entities.group import Group
from resauthz.domain.entities.group_member import GroupMember
from resauthz.domain.entities.resource_action_grant import ResourceActionGrant

__all__ = [
    "AuthorizationResource",
    "DynamicGroup",
    "GrantInheritance",
    "Group",
    "GroupMember",
    "ResourceActionGrant",
]
