"""PostgreSQL authorization resource repository implementation."""

from collections.abc import Collection
from uuid import UUID

from psycopg import AsyncConnection

from resauthz.application.dto import GrantCriteria
from resauthz.domain.entities import AuthorizationResource
from resauthz.infrastructure.persistence.postgres.grant_criteria_sql import (
    _build_grant_criteria_conditions,
    where_clause,
)

_COLUMNS = "r.id, r.resource_class, r.resource_identifier, r.created_at"


def _to_resource(r: tuple) -> AuthorizationResource:
    return AuthorizationResource(
        id=r[0],
        resource_class=r[1],
        resource_identifier=r[2],
        created_at=r[3],
    )


class PostgresResourceRepository:
    """Authorization resource repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, resource_id: UUID) -> AuthorizationResource | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM authorization_resource r WHERE r.id = %s",
            (resource_id,),
        )
        r = await cur.fetchone()
        return _to_resource(r) if r else None

    async def get_by_class_and_identifier(
        self, resource_class: str, resource_identifier: str | None
    ) -> AuthorizationResource | None:
        """Get resource by key; identifier None is the collection resource."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM authorization_resource r "
            "WHERE r.resource_class = %s AND r.resource_identifier IS NOT DISTINCT FROM %s",
            (resource_class, resource_identifier),
        )
        r = await cur.fetchone()
        return _to_resource(r) if r else None

    async def list_by_class_and_identifiers(
        self, resource_class: str, resource_identifiers: Collection[str] | None
    ) -> list[AuthorizationResource]:
        """Resources of a class with the given identifiers, or all of the class if None."""
        if resource_identifiers is None:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM authorization_resource r "
                "WHERE r.resource_class = %s ORDER BY r.created_at, r.id",
                (resource_class,),
            )
        else:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM authorization_resource r "
                "WHERE r.resource_class = %s AND r.resource_identifier = ANY(%s) "
                "ORDER BY r.created_at, r.id",
                (resource_class, list(resource_identifiers)),
            )
        rows = await cur.fetchall()
        return [_to_resource(r) for r in rows]

    async def list_collection_resources(self) -> list[AuthorizationResource]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM authorization_resource r "
            "WHERE r.resource_identifier IS NULL ORDER BY r.created_at, r.id"
        )
        rows = await cur.fetchall()
        return [_to_resource(r) for r in rows]

    async def list_with_grants(
        self, criteria: GrantCriteria, offset: int = 0, limit: int = 1024
    ) -> list[AuthorizationResource]:
        """Distinct resources with at least one grant matching criteria, in creation order."""
        conditions, params = _build_grant_criteria_conditions(criteria)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM authorization_resource r "
            "WHERE EXISTS (SELECT 1 FROM resource_action_grant g "
            "WHERE " + " AND ".join(["g.resource_id = r.id", *conditions]) + ") "
            "ORDER BY r.created_at, r.id OFFSET %s LIMIT %s",
            (*params, offset, limit),
        )
        rows = await cur.fetchall()
        return [_to_resource(r) for r in rows]

    async def list_resource_classes_with_grants(self, criteria: GrantCriteria) -> set[str]:
        conditions, params = _build_grant_criteria_conditions(criteria)
        cur = await self._conn.execute(
            "SELECT DISTINCT r.resource_class FROM resource_action_grant g "
            "JOIN authorization_resource r ON r.id = g.resource_id" + where_clause(conditions),
            tuple(params),
        )
        rows = await cur.fetchall()
        return {r[0] for r in rows}

    async def create(self, resource: AuthorizationResource) -> AuthorizationResource:
        await self._conn.execute(
            "INSERT INTO authorization_resource (id, resource_class, resource_identifier, created_at) "
            "VALUES (%s, %s, %s, %s)",
            (
                resource.id,
                resource.resource_class,
                resource.resource_identifier,
                resource.created_at,
            ),
        )
        return resource

    async def delete(self, resource_ids: Collection[UUID]) -> None:
        await self._conn.execute(
            "DELETE FROM authorization_resource WHERE id = ANY(%s)",
            (list(resource_ids),),
        )
