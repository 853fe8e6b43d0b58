"""Repository ports."""

from resauthz.application.ports.repositories.grant_inheritance_repository import (
    GrantInheritanceRepository,
)
from resauthz.application.ports.repositories.grant_repository import GrantRepository
from resauthz.application.ports.repositories.group_member_repository import (
    GroupMemberRepository,
)
from resauthz.application.ports.repositories.group_repository import GroupRepository
from resauthz.application.ports.repositories.resource_repository import (
    ResourceRepository,
)

__all__ = [
    "GrantInheritanceRepository",
    "GrantRepository",
    "GroupMemberRepository",
    "GroupRepository",
    "ResourceRepository",
]
