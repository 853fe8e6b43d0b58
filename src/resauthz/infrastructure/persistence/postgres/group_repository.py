"""PostgreSQL group repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from resauthz.domain.entities import Group


class PostgresGroupRepository:
    """Group repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, group_id: UUID) -> Group | None:
        cur = await self._conn.execute(
            "SELECT id, name FROM authorization_group WHERE id = %s",
            (group_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Group(id=r[0], name=r[1])

    async def list_all(self, offset: int = 0, limit: int = 30) -> list[Group]:
        cur = await self._conn.execute(
            "SELECT id, name FROM authorization_group ORDER BY name, id OFFSET %s LIMIT %s",
            (offset, limit),
        )
        rows = await cur.fetchall()
        return [Group(id=r[0], name=r[1]) for r in rows]

    async def create(self, group: Group) -> Group:
        await self._conn.execute(
            "INSERT INTO authorization_group (id, name) VALUES (%s, %s)",
            (group.id, group.name),
        )
        return group

    async def delete(self, group_id: UUID) -> None:
        await self._conn.execute("DELETE FROM authorization_group WHERE id = %s", (group_id,))
