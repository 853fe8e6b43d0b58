"""PostgreSQL grant inheritance repository implementation."""

from collections.abc import Collection
from uuid import UUID

from psycopg import AsyncConnection

from resauthz.application.dto import GrantCriteria
from resauthz.domain.entities import GrantInheritance
from resauthz.infrastructure.persistence.postgres.grant_criteria_sql import (
    _build_grant_criteria_conditions,
    where_clause,
)


class PostgresGrantInheritanceRepository:
    """Grant inheritance repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(
        self, source_resource_id: UUID, target_resource_id: UUID
    ) -> GrantInheritance | None:
        cur = await self._conn.execute(
            "SELECT id, source_resource_id, target_resource_id FROM grant_inheritance "
            "WHERE source_resource_id = %s AND target_resource_id = %s",
            (source_resource_id, target_resource_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return GrantInheritance(id=r[0], source_resource_id=r[1], target_resource_id=r[2])

    async def list_target_resource_classes(self, source_criteria: GrantCriteria) -> set[str]:
        """Classes of targets whose source resource has a grant matching source_criteria."""
        conditions, params = _build_grant_criteria_conditions(source_criteria)
        cur = await self._conn.execute(
            "SELECT DISTINCT t.resource_class FROM grant_inheritance i "
            "JOIN authorization_resource t ON t.id = i.target_resource_id "
            "JOIN authorization_resource r ON r.id = i.source_resource_id "
            "JOIN resource_action_grant g ON g.resource_id = r.id" + where_clause(conditions),
            tuple(params),
        )
        rows = await cur.fetchall()
        return {r[0] for r in rows}

    async def create(self, inheritance: GrantInheritance) -> GrantInheritance:
        await self._conn.execute(
            "INSERT INTO grant_inheritance (id, source_resource_id, target_resource_id) "
            "VALUES (%s, %s, %s)",
            (inheritance.id, inheritance.source_resource_id, inheritance.target_resource_id),
        )
        return inheritance

    async def delete(self, inheritance_id: UUID) -> None:
        await self._conn.execute("DELETE FROM grant_inheritance WHERE id = %s", (inheritance_id,))

    async def delete_by_resource_ids(self, resource_ids: Collection[UUID]) -> None:
        ids = list(resource_ids)
        await self._conn.execute(
            "DELETE FROM grant_inheritance "
            "WHERE source_resource_id = ANY(%s) OR target_resource_id = ANY(%s)",
            (ids, ids),
        )
