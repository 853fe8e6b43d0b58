"""PostgreSQL group member repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from resauthz.domain.entities import GroupMember
from resauthz.domain.value_objects import ChildGroupMember, UserMember


def _to_member(r: tuple) -> GroupMember:
    member = UserMember(r[2]) if r[2] is not None else ChildGroupMember(r[3])
    return GroupMember(id=r[0], group_id=r[1], member=member)


class PostgresGroupMemberRepository:
    """Group member repository - edge lookups are single indexed queries."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, member_id: UUID) -> GroupMember | None:
        cur = await self._conn.execute(
            "SELECT id, group_id, user_identifier, child_group_id "
            "FROM authorization_group_member WHERE id = %s",
            (member_id,),
        )
        r = await cur.fetchone()
        return _to_member(r) if r else None

    async def list_by_group(
        self, group_id: UUID, offset: int = 0, limit: int = 30
    ) -> list[GroupMember]:
        cur = await self._conn.execute(
            "SELECT id, group_id, user_identifier, child_group_id "
            "FROM authorization_group_member WHERE group_id = %s "
            "ORDER BY created_at, id OFFSET %s LIMIT %s",
            (group_id, offset, limit),
        )
        rows = await cur.fetchall()
        return [_to_member(r) for r in rows]

    async def list_child_group_ids(self, group_id: UUID) -> list[UUID]:
        cur = await self._conn.execute(
            "SELECT child_group_id FROM authorization_group_member "
            "WHERE group_id = %s AND child_group_id IS NOT NULL",
            (group_id,),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]

    async def list_parent_group_ids(self, group_id: UUID) -> list[UUID]:
        cur = await self._conn.execute(
            "SELECT group_id FROM authorization_group_member WHERE child_group_id = %s",
            (group_id,),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]

    async def list_group_ids_for_user(self, user_identifier: str) -> list[UUID]:
        cur = await self._conn.execute(
            "SELECT DISTINCT group_id FROM authorization_group_member WHERE user_identifier = %s",
            (user_identifier,),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]

    async def has_user_member(self, group_id: UUID, user_identifier: str) -> bool:
        cur = await self._conn.execute(
            "SELECT 1 FROM authorization_group_member "
            "WHERE group_id = %s AND user_identifier = %s LIMIT 1",
            (group_id, user_identifier),
        )
        return await cur.fetchone() is not None

    async def create(self, member: GroupMember) -> GroupMember:
        user_identifier = member.member.user_identifier if isinstance(member.member, UserMember) else None
        child_group_id = (
            member.member.child_group_id if isinstance(member.member, ChildGroupMember) else None
        )
        await self._conn.execute(
            "INSERT INTO authorization_group_member (id, group_id, user_identifier, child_group_id) "
            "VALUES (%s, %s, %s, %s)",
            (member.id, member.group_id, user_identifier, child_group_id),
        )
        return member

    async def delete(self, member_id: UUID) -> None:
        await self._conn.execute(
            "DELETE FROM authorization_group_member WHERE id = %s", (member_id,)
        )

    async def delete_by_group(self, group_id: UUID) -> None:
        """Delete edges where the group is the parent or the child."""
        await self._conn.execute(
            "DELETE FROM authorization_group_member WHERE group_id = %s OR child_group_id = %s",
            (group_id, group_id),
        )
