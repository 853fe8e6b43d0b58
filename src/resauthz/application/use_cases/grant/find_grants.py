"""Find resource action grants use case."""

from collections.abc import Collection

from resauthz.application.dto import GrantCriteria, HolderCriteria
from resauthz.application.ports import UnitOfWorkFactory
from resauthz.application.services.action_resolution import DEFAULT_PAGE_SIZE, clamp_limit
from resauthz.domain.entities import ResourceActionGrant
from resauthz.domain.value_objects import ResourceIdentifierFilter


class FindGrantsUseCase:
    """Query grants by resource, action and holder."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        resource_class: str | None = None,
        resource_identifier: str | ResourceIdentifierFilter | None = ResourceIdentifierFilter.ANY,
        actions: Collection[str] | None = None,
        holder: HolderCriteria | None = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[ResourceActionGrant]:
        """Grants in resource creation order, then grant creation order.

        Holder criteria are OR-combined; ``holder=None`` does not filter on the holder.
        """
        limit = clamp_limit(limit)
        if limit == 0:
            return []
        criteria = GrantCriteria(
            resource_class=resource_class,
            resource_identifier=resource_identifier,
            actions=frozenset(actions) if actions is not None else None,
            holder=holder,
        )
        async with self._uow_factory() as uow:
            return await uow.grants.find(criteria, max(0, offset), limit)
