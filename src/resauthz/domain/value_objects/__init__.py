"""Domain value objects."""

from resauthz.domain.value_objects.actions import (
    MANAGE_ACTION,
    MANAGE_ACTION_NAMES,
    MANAGE_RESOURCE_COLLECTION_POLICY_PREFIX,
    RESOURCE_KEY_SEPARATOR,
    manage_resource_collection_policy_group,
)
from resauthz.domain.value_objects.grant_holder import (
    DynamicGroupHolder,
    GrantHolder,
    GroupHolder,
    UserHolder,
    holder_columns,
    holder_from_columns,
)
from resauthz.domain.value_objects.group_member_holder import (
    ChildGroupMember,
    GroupMemberHolder,
    UserMember,
)
from resauthz.domain.value_objects.resource_identifier_filter import (
    ResourceIdentifierFilter,
)

__all__ = [
    "MANAGE_ACTION",
    "MANAGE_ACTION_NAMES",
    "MANAGE_RESOURCE_COLLECTION_POLICY_PREFIX",
    "RESOURCE_KEY_SEPARATOR",
    "ChildGroupMember",
    "DynamicGroupHolder",
    "GrantHolder",
    "GroupHolder",
    "GroupMemberHolder",
    "ResourceIdentifierFilter",
    "UserHolder",
    "UserMember",
    "holder_columns",
    "holder_from_columns",
    "manage_resource_collection_policy_group",
]
