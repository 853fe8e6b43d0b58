"""Dynamic group evaluator - configured, per-request group membership."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from resauthz.application.ports import ExpressionEvaluator, Predicate
from resauthz.domain.entities import DynamicGroup
from resauthz.domain.exceptions import ConfigurationInvalid, DynamicGroupUndefined
from resauthz.domain.value_objects import manage_resource_collection_policy_group

logger = logging.getLogger(__name__)


class DynamicGroupEvaluator:
    """Evaluates configured membership predicates against a user's attributes.

    Holds the declared dynamic groups followed by the groups derived from the
    manage-resource-collection policies, in declaration order. Expressions are
    compiled once, here. No caching and no persistence.
    """

    def __init__(
        self,
        dynamic_groups: Iterable[DynamicGroup],
        evaluator: ExpressionEvaluator,
        collection_policies: Mapping[str, str] | None = None,
    ) -> None:
        self._predicates: dict[str, Predicate] = {}
        self._declared: list[str] = []
        for dynamic_group in dynamic_groups:
            self._add(dynamic_group.identifier, dynamic_group.membership_expression, evaluator)
            self._declared.append(dynamic_group.identifier)
        for resource_class, expression in (collection_policies or {}).items():
            self._add(manage_resource_collection_policy_group(resource_class), expression, evaluator)

    def _add(self, identifier: str, expression: str, evaluator: ExpressionEvaluator) -> None:
        if identifier in self._predicates:
            raise ConfigurationInvalid(f"dynamic group '{identifier}' is defined more than once")
        self._predicates[identifier] = evaluator.compile(expression)

    def is_defined(self, identifier: str) -> bool:
        return identifier in self._predicates

    def dynamic_group_identifiers(self) -> list[str]:
        """Configured dynamic groups, without the derived collection policy groups."""
        return list(self._declared)

    def is_member_of_dynamic_group(self, identifier: str, attributes: Mapping[str, Any]) -> bool:
        predicate = self._predicates.get(identifier)
        if predicate is None:
            raise DynamicGroupUndefined(identifier)
        return predicate(attributes)

    def members_of(self, attributes: Mapping[str, Any]) -> list[str]:
        """Identifiers of all groups whose predicate holds, in declaration order.

        A predicate failing at runtime counts as not a member of that group only.
        """
        members = []
        for identifier, predicate in self._predicates.items():
            try:
                if predicate(attributes):
                    members.append(identifier)
            except ConfigurationInvalid as e:
                logger.warning("dynamic group %s not evaluated: %s", identifier, e)
        return members
