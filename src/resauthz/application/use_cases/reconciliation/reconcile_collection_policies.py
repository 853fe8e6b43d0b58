"""Reconcile manage-resource-collection policy grants with configuration."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import uuid4

from resauthz.application.dto import GrantCriteria, HolderCriteria, ReconciliationReport
from resauthz.application.ports import UnitOfWorkFactory
from resauthz.application.use_cases.resource.resource_keys import get_or_create_resource
from resauthz.domain.entities import AuthorizationResource, ResourceActionGrant
from resauthz.domain.exceptions import StoreFailure
from resauthz.domain.value_objects import (
    MANAGE_ACTION,
    DynamicGroupHolder,
    manage_resource_collection_policy_group,
)

logger = logging.getLogger(__name__)


def policy_grant_criteria(resource: AuthorizationResource) -> GrantCriteria:
    """Criteria matching the derived policy grants on a collection resource."""
    return GrantCriteria(
        resource_ids=frozenset({resource.id}),
        actions=frozenset({MANAGE_ACTION}),
        holder=HolderCriteria(
            dynamic_group_identifiers=frozenset(
                {manage_resource_collection_policy_group(resource.resource_class)}
            )
        ),
    )


class ReconcileCollectionPoliciesUseCase:
    """Bring collection resources and their derived manage grants in line with configuration.

    Every configured resource class gets its collection resource and exactly one
    derived manage grant. Derived grants of classes no longer configured are
    removed, and so is their collection resource once no grant remains on it.
    Each class is reconciled in its own transaction; running twice in a row
    changes nothing the second time.
    """

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, resource_classes: Iterable[str]) -> ReconciliationReport:
        """Reconcile. Raises StoreFailure naming the failed classes after trying all of them."""
        configured = list(dict.fromkeys(resource_classes))
        report = ReconciliationReport()
        first_error: StoreFailure | None = None

        for resource_class in configured:
            try:
                created_resource, created_grant, removed = await self._ensure_policy(
                    resource_class
                )
            except StoreFailure as err:
                logger.exception("reconciling collection policy of %s failed", resource_class)
                report.failed.append(resource_class)
                first_error = first_error or err
                continue
            if created_resource:
                report.created_resources.append(resource_class)
            if created_grant:
                report.created_grants.append(resource_class)
            if removed:
                report.removed_grants.append(resource_class)

        async with self._uow_factory() as uow:
            collection_resources = await uow.resources.list_collection_resources()
        stale = [r for r in collection_resources if r.resource_class not in configured]

        for resource in stale:
            try:
                removed, removed_resource = await self._remove_policy(resource)
            except StoreFailure as err:
                logger.exception(
                    "removing collection policy of %s failed", resource.resource_class
                )
                report.failed.append(resource.resource_class)
                first_error = first_error or err
                continue
            if removed:
                report.removed_grants.append(resource.resource_class)
            if removed_resource:
                report.removed_resources.append(resource.resource_class)

        if report.changed:
            logger.info(
                "collection policies reconciled: created resources %s, created grants %s, "
                "removed grants %s, removed resources %s",
                report.created_resources,
                report.created_grants,
                report.removed_grants,
                report.removed_resources,
            )
        if first_error is not None:
            raise StoreFailure(
                "collection policy reconciliation failed for: " + ", ".join(report.failed)
            ) from first_error
        return report

    async def _ensure_policy(self, resource_class: str) -> tuple[bool, bool, int]:
        """Returns (resource created, grant created, duplicate grants removed)."""
        async with self._uow_factory() as uow:
            resource, created_resource = await get_or_create_resource(uow, resource_class, None)
            grants = await uow.grants.find(policy_grant_criteria(resource))
            if not grants:
                await uow.grants.create(
                    ResourceActionGrant(
                        id=uuid4(),
                        resource_id=resource.id,
                        action=MANAGE_ACTION,
                        holder=DynamicGroupHolder(
                            manage_resource_collection_policy_group(resource_class)
                        ),
                        created_at=datetime.now(UTC),
                    )
                )
            for duplicate in grants[1:]:
                await uow.grants.delete(duplicate.id)
        return created_resource, not grants, max(0, len(grants) - 1)

    async def _remove_policy(self, resource: AuthorizationResource) -> tuple[int, bool]:
        """Returns (derived grants removed, resource removed)."""
        async with self._uow_factory() as uow:
            removed = await uow.grants.delete_matching(policy_grant_criteria(resource))
            remaining = await uow.grants.count(
                GrantCriteria(resource_ids=frozenset({resource.id}))
            )
            if remaining:
                return removed, False
            await uow.grant_inheritances.delete_by_resource_ids([resource.id])
            await uow.resources.delete([resource.id])
        return removed, True
