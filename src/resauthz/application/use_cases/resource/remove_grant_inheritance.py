"""Remove grant inheritance use case."""

from resauthz.application.ports import UnitOfWorkFactory


class RemoveGrantInheritanceUseCase:
    """Remove a grant inheritance edge. Resources are kept."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        source_resource_class: str,
        source_resource_identifier: str | None,
        target_resource_class: str,
        target_resource_identifier: str | None,
    ) -> bool:
        """Returns False if either resource or the edge does not exist."""
        async with self._uow_factory() as uow:
            source = await uow.resources.get_by_class_and_identifier(
                source_resource_class, source_resource_identifier
            )
            target = await uow.resources.get_by_class_and_identifier(
                target_resource_class, target_resource_identifier
            )
            if source is None or target is None:
                return False
            inheritance = await uow.grant_inheritances.get(source.id, target.id)
            if inheritance is None:
                return False
            await uow.grant_inheritances.delete(inheritance.id)
        return True
