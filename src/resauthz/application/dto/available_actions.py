"""Available resource class actions DTO."""

from dataclasses import dataclass, field

ActionCatalog = dict[str, dict[str, str]]


@dataclass
class AvailableActions:
    """Item and collection action catalogs of a resource class.

    Catalogs map action -> {language tag -> localized name}, in registration order.
    """

    resource_class: str
    item_actions: ActionCatalog = field(default_factory=dict)
    collection_actions: ActionCatalog = field(default_factory=dict)

    def catalog_for(self, resource_identifier: str | None) -> ActionCatalog:
        """Catalog for an item resource, or for the collection if identifier is None."""
        return self.collection_actions if resource_identifier is None else self.item_actions
