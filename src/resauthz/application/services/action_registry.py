"""Available actions registry - the action catalog of each resource class."""

from collections.abc import Iterable, Mapping

from resauthz.application.dto import ActionCatalog, AvailableActions
from resauthz.domain.value_objects import MANAGE_ACTION, MANAGE_ACTION_NAMES

ActionsInput = Mapping[str, Mapping[str, str]] | Iterable[str]


def _to_catalog(actions: ActionsInput) -> ActionCatalog:
    if isinstance(actions, Mapping):
        catalog = {action: dict(names) for action, names in actions.items()}
    else:
        catalog = {action: {} for action in actions}
    catalog.setdefault(MANAGE_ACTION, dict(MANAGE_ACTION_NAMES))
    return catalog


class AvailableActionsRegistry:
    """Capability table filled by the modules that own resource classes.

    ``manage`` is always available, in the item and in the collection catalog,
    also for classes nobody registered.
    """

    def __init__(self) -> None:
        self._by_class: dict[str, AvailableActions] = {}

    def register(
        self,
        resource_class: str,
        item_actions: ActionsInput,
        collection_actions: ActionsInput,
    ) -> AvailableActions:
        """Register (or replace) the catalogs of a resource class.

        Actions are given as action -> {language tag -> name} or as plain action names.
        """
        available = AvailableActions(
            resource_class=resource_class,
            item_actions=_to_catalog(item_actions),
            collection_actions=_to_catalog(collection_actions),
        )
        self._by_class[resource_class] = available
        return available

    def unregister(self, resource_class: str) -> None:
        self._by_class.pop(resource_class, None)

    def lookup(self, resource_class: str) -> AvailableActions | None:
        return self._by_class.get(resource_class)

    def get(self, resource_class: str) -> AvailableActions:
        """Registered catalogs, or manage-only catalogs for an unknown class."""
        available = self._by_class.get(resource_class)
        if available is None:
            available = AvailableActions(
                resource_class=resource_class,
                item_actions=_to_catalog(()),
                collection_actions=_to_catalog(()),
            )
        return available

    def catalog_for(self, resource_class: str, resource_identifier: str | None) -> ActionCatalog:
        return self.get(resource_class).catalog_for(resource_identifier)

    def resource_classes(self) -> list[str]:
        return list(self._by_class)
