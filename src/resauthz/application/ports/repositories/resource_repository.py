"""Authorization resource repository port."""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from resauthz.application.dto import GrantCriteria
from resauthz.domain.entities import AuthorizationResource


class ResourceRepository(Protocol):
    """Port for authorization resource persistence."""

    async def get_by_id(self, resource_id: UUID) -> AuthorizationResource | None: ...

    async def get_by_class_and_identifier(
        self, resource_class: str, resource_identifier: str | None
    ) -> AuthorizationResource | None: ...

    async def list_by_class_and_identifiers(
        self, resource_class: str, resource_identifiers: Collection[str] | None
    ) -> list[AuthorizationResource]: ...

    async def list_collection_resources(self) -> list[AuthorizationResource]: ...

    async def list_with_grants(
        self, criteria: GrantCriteria, offset: int = 0, limit: int = 1024
    ) -> list[AuthorizationResource]: ...

    async def list_resource_classes_with_grants(self, criteria: GrantCriteria) -> set[str]: ...

    async def create(self, resource: AuthorizationResource) -> AuthorizationResource: ...

    async def delete(self, resource_ids: Collection[UUID]) -> None: ...
