"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from resauthz.application.ports.repositories import (
    GrantInheritanceRepository,
    GrantRepository,
    GroupMemberRepository,
    GroupRepository,
    ResourceRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def resources(self) -> ResourceRepository: ...

    @property
    def grants(self) -> GrantRepository: ...

    @property
    def groups(self) -> GroupRepository: ...

    @property
    def group_members(self) -> GroupMemberRepository: ...

    @property
    def grant_inheritances(self) -> GrantInheritanceRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
