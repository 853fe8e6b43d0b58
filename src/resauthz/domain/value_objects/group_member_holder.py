"""Group member holder - either a user or a child group."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserMember:
    """User directly in a group."""

    user_identifier: str


@dataclass(frozen=True)
class ChildGroupMember:
    """Group nested in a parent group."""

    child_group_id: UUID


GroupMemberHolder = UserMember | ChildGroupMember
