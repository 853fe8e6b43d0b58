"""PostgreSQL resource action grant repository implementation."""

from collections.abc import Collection
from uuid import UUID

from psycopg import AsyncConnection

from resauthz.application.dto import GrantCriteria
from resauthz.domain.entities import ResourceActionGrant
from resauthz.domain.value_objects import holder_columns, holder_from_columns
from resauthz.infrastructure.persistence.postgres.grant_criteria_sql import (
    _build_grant_criteria_conditions,
    where_clause,
)

_SELECT = (
    "SELECT g.id, g.resource_id, g.action, g.user_identifier, g.group_id, "
    "g.dynamic_group_identifier, g.created_at "
    "FROM resource_action_grant g JOIN authorization_resource r ON r.id = g.resource_id"
)


def _to_grant(r: tuple) -> ResourceActionGrant:
    return ResourceActionGrant(
        id=r[0],
        resource_id=r[1],
        action=r[2],
        holder=holder_from_columns(r[3], r[4], r[5]),
        created_at=r[6],
    )


class PostgresGrantRepository:
    """Resource action grant repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, grant_id: UUID) -> ResourceActionGrant | None:
        cur = await self._conn.execute(f"{_SELECT} WHERE g.id = %s", (grant_id,))
        r = await cur.fetchone()
        return _to_grant(r) if r else None

    async def find(
        self, criteria: GrantCriteria, offset: int = 0, limit: int = 1024
    ) -> list[ResourceActionGrant]:
        """Grants matching criteria, by resource creation order then grant creation order."""
        conditions, params = _build_grant_criteria_conditions(criteria)
        cur = await self._conn.execute(
            _SELECT
            + where_clause(conditions)
            + " ORDER BY r.created_at, r.id, g.created_at, g.id OFFSET %s LIMIT %s",
            (*params, offset, limit),
        )
        rows = await cur.fetchall()
        return [_to_grant(r) for r in rows]

    async def count(self, criteria: GrantCriteria) -> int:
        conditions, params = _build_grant_criteria_conditions(criteria)
        cur = await self._conn.execute(
            "SELECT COUNT(*) FROM resource_action_grant g "
            "JOIN authorization_resource r ON r.id = g.resource_id" + where_clause(conditions),
            tuple(params),
        )
        r = await cur.fetchone()
        return r[0] if r else 0

    async def create(self, grant: ResourceActionGrant) -> ResourceActionGrant:
        user_identifier, group_id, dynamic_group_identifier = holder_columns(grant.holder)
        await self._conn.execute(
            "INSERT INTO resource_action_grant "
            "(id, resource_id, action, user_identifier, group_id, dynamic_group_identifier, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                grant.id,
                grant.resource_id,
                grant.action,
                user_identifier,
                group_id,
                dynamic_group_identifier,
                grant.created_at,
            ),
        )
        return grant

    async def delete(self, grant_id: UUID) -> None:
        await self._conn.execute("DELETE FROM resource_action_grant WHERE id = %s", (grant_id,))

    async def delete_matching(self, criteria: GrantCriteria) -> int:
        conditions, params = _build_grant_criteria_conditions(criteria)
        cur = await self._conn.execute(
            "DELETE FROM resource_action_grant g USING authorization_resource r "
            "WHERE " + " AND ".join(["r.id = g.resource_id", *conditions]),
            tuple(params),
        )
        return cur.rowcount

    async def delete_by_resource_ids(self, resource_ids: Collection[UUID]) -> int:
        cur = await self._conn.execute(
            "DELETE FROM resource_action_grant WHERE resource_id = ANY(%s)",
            (list(resource_ids),),
        )
        return cur.rowcount

    async def delete_by_group(self, group_id: UUID) -> int:
        cur = await self._conn.execute(
            "DELETE FROM resource_action_grant WHERE group_id = %s",
            (group_id,),
        )
        return cur.rowcount
