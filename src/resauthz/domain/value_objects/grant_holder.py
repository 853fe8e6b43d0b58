"""Grant holder - the user, group or dynamic group a grant applies to."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserHolder:
    """Grant held by a single user."""

    user_identifier: str


@dataclass(frozen=True)
class GroupHolder:
    """Grant held by a persisted group (and transitively its members)."""

    group_id: UUID


@dataclass(frozen=True)
class DynamicGroupHolder:
    """Grant held by a configured dynamic group."""

    dynamic_group_identifier: str


GrantHolder = UserHolder | GroupHolder | DynamicGroupHolder


def holder_columns(holder: GrantHolder) -> tuple[str | None, UUID | None, str | None]:
    """Split a holder into (user_identifier, group_id, dynamic_group_identifier)."""
    match holder:
        case UserHolder(user_identifier=user_identifier):
            return user_identifier, None, None
        case GroupHolder(group_id=group_id):
            return None, group_id, None
        case DynamicGroupHolder(dynamic_group_identifier=identifier):
            return None, None, identifier
    raise TypeError(f"not a grant holder: {holder!r}")


def holder_from_columns(
    user_identifier: str | None,
    group_id: UUID | None,
    dynamic_group_identifier: str | None,
) -> GrantHolder:
    """Build a holder from exactly one non-null column."""
    if user_identifier is not None:
        return UserHolder(user_identifier)
    if group_id is not None:
        return GroupHolder(group_id)
    if dynamic_group_identifier is not None:
        return DynamicGroupHolder(dynamic_group_identifier)
    raise ValueError("grant row has no holder")
