"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from resauthz.domain.exceptions import StoreFailure
from resauthz.infrastructure.persistence.postgres.grant_inheritance_repository import (
    PostgresGrantInheritanceRepository,
)
from resauthz.infrastructure.persistence.postgres.grant_repository import (
    PostgresGrantRepository,
)
from resauthz.infrastructure.persistence.postgres.group_member_repository import (
    PostgresGroupMemberRepository,
)
from resauthz.infrastructure.persistence.postgres.group_repository import (
    PostgresGroupRepository,
)
from resauthz.infrastructure.persistence.postgres.resource_repository import (
    PostgresResourceRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._resources = PostgresResourceRepository(self._conn)
        self._grants = PostgresGrantRepository(self._conn)
        self._groups = PostgresGroupRepository(self._conn)
        self._group_members = PostgresGroupMemberRepository(self._conn)
        self._grant_inheritances = PostgresGrantInheritanceRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def resources(self) -> PostgresResourceRepository:
        return self._resources

    @property
    def grants(self) -> PostgresGrantRepository:
        return self._grants

    @property
    def groups(self) -> PostgresGroupRepository:
        return self._groups

    @property
    def group_members(self) -> PostgresGroupMemberRepository:
        return self._group_members

    @property
    def grant_inheritances(self) -> PostgresGrantInheritanceRepository:
        return self._grant_inheritances

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Commits on success. Any error rolls the transaction back once; database
    errors, including failing to get or release a connection, are re-raised
    as StoreFailure.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        try:
            async with uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await _rollback_quietly(uow)
                    raise
        except psycopg.Error as e:
            logger.error("transaction rolled back: %s", e)
            raise StoreFailure(str(e)) from e

    return factory


async def _rollback_quietly(uow: PostgresUnitOfWork) -> None:
    # The connection may already be gone; the original error wins.
    try:
        await uow.rollback()
    except psycopg.Error as e:
        logger.warning("rollback failed: %s", e)
