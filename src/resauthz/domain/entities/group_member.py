"""Group member entity - one edge of the group graph."""

from dataclasses import dataclass
from uuid import UUID

from resauthz.domain.value_objects import GroupMemberHolder


@dataclass
class GroupMember:
    """Membership of a user or a child group in a (parent) group."""

    id: UUID
    group_id: UUID
    member: GroupMemberHolder
