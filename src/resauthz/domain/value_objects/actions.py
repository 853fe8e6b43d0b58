"""Distinguished action names and reserved identifiers."""

MANAGE_ACTION = "manage"

MANAGE_ACTION_NAMES: dict[str, str] = {
    "en": "Manage",
    "de": "Verwalten",
}

MANAGE_RESOURCE_COLLECTION_POLICY_PREFIX = "manage_resource_collection:"

# Reserved in resource classes and identifiers (dotted attribute names).
RESOURCE_KEY_SEPARATOR = "."


def manage_resource_collection_policy_group(resource_class: str) -> str:
    """Dynamic group identifier holding the derived collection policy grant of a class."""
    return MANAGE_RESOURCE_COLLECTION_POLICY_PREFIX + resource_class
