"""Application entry point and composition root."""

import asyncio
import logging
import sys
from dataclasses import dataclass

from resauthz import __version__
from resauthz.application.dto import ReconciliationReport
from resauthz.application.ports import ExpressionEvaluator, UnitOfWorkFactory
from resauthz.application.services import (
    ActionResolutionEngine,
    AvailableActionsRegistry,
    DynamicGroupEvaluator,
)
from resauthz.application.use_cases.grant.add_grant import AddGrantUseCase
from resauthz.application.use_cases.grant.find_grants import FindGrantsUseCase
from resauthz.application.use_cases.grant.remove_grant import RemoveGrantUseCase
from resauthz.application.use_cases.grant.remove_grants import RemoveGrantsUseCase
from resauthz.application.use_cases.group.add_group import AddGroupUseCase
from resauthz.application.use_cases.group.add_group_member import AddGroupMemberUseCase
from resauthz.application.use_cases.group.get_group import GetGroupUseCase, ListGroupsUseCase
from resauthz.application.use_cases.group.remove_group import RemoveGroupUseCase
from resauthz.application.use_cases.group.remove_group_member import RemoveGroupMemberUseCase
from resauthz.application.use_cases.reconciliation.reconcile_collection_policies import (
    ReconcileCollectionPoliciesUseCase,
)
from resauthz.application.use_cases.resource.add_grant_inheritance import (
    AddGrantInheritanceUseCase,
)
from resauthz.application.use_cases.resource.add_resource import AddResourceUseCase
from resauthz.application.use_cases.resource.remove_grant_inheritance import (
    RemoveGrantInheritanceUseCase,
)
from resauthz.application.use_cases.resource.remove_resource import RemoveResourceUseCase
from resauthz.config import Settings, get_settings
from resauthz.domain.entities import DynamicGroup
from resauthz.infrastructure.expression.ast_evaluator import AstExpressionEvaluator
from resauthz.infrastructure.persistence.postgres.connection import create_pool
from resauthz.infrastructure.persistence.postgres.unit_of_work import create_uow_factory

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging from Settings.log_level."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr, force=True)


@dataclass
class Container:
    """Wired engine and use cases."""

    action_registry: AvailableActionsRegistry
    dynamic_groups: DynamicGroupEvaluator
    engine: ActionResolutionEngine
    add_grant: AddGrantUseCase
    remove_grant: RemoveGrantUseCase
    remove_grants: RemoveGrantsUseCase
    find_grants: FindGrantsUseCase
    add_resource: AddResourceUseCase
    remove_resource: RemoveResourceUseCase
    add_grant_inheritance: AddGrantInheritanceUseCase
    remove_grant_inheritance: RemoveGrantInheritanceUseCase
    add_group: AddGroupUseCase
    remove_group: RemoveGroupUseCase
    add_group_member: AddGroupMemberUseCase
    remove_group_member: RemoveGroupMemberUseCase
    get_group: GetGroupUseCase
    list_groups: ListGroupsUseCase
    reconcile_collection_policies: ReconcileCollectionPoliciesUseCase


def build_dynamic_groups(
    settings: Settings, evaluator: ExpressionEvaluator
) -> DynamicGroupEvaluator:
    """Configured dynamic groups plus one derived group per collection policy."""
    return DynamicGroupEvaluator(
        [
            DynamicGroup(
                identifier=dynamic_group.identifier,
                membership_expression=dynamic_group.is_current_user_group_member_expression,
            )
            for dynamic_group in settings.dynamic_groups
        ],
        evaluator,
        collection_policies={
            resource_class.identifier: resource_class.manage_resource_collection_policy
            for resource_class in settings.resource_classes
        },
    )


def create_container(
    settings: Settings,
    uow_factory: UnitOfWorkFactory,
    action_registry: AvailableActionsRegistry | None = None,
    evaluator: ExpressionEvaluator | None = None,
) -> Container:
    """Composition root - build engine and use cases with all dependencies."""
    action_registry = action_registry or AvailableActionsRegistry()
    dynamic_groups = build_dynamic_groups(settings, evaluator or AstExpressionEvaluator())

    return Container(
        action_registry=action_registry,
        dynamic_groups=dynamic_groups,
        engine=ActionResolutionEngine(
            unit_of_work_factory=uow_factory,
            dynamic_groups=dynamic_groups,
            action_registry=action_registry,
        ),
        add_grant=AddGrantUseCase(uow_factory, action_registry),
        remove_grant=RemoveGrantUseCase(uow_factory),
        remove_grants=RemoveGrantsUseCase(uow_factory),
        find_grants=FindGrantsUseCase(uow_factory),
        add_resource=AddResourceUseCase(uow_factory),
        remove_resource=RemoveResourceUseCase(uow_factory),
        add_grant_inheritance=AddGrantInheritanceUseCase(uow_factory),
        remove_grant_inheritance=RemoveGrantInheritanceUseCase(uow_factory),
        add_group=AddGroupUseCase(uow_factory),
        remove_group=RemoveGroupUseCase(uow_factory),
        add_group_member=AddGroupMemberUseCase(uow_factory),
        remove_group_member=RemoveGroupMemberUseCase(uow_factory),
        get_group=GetGroupUseCase(uow_factory),
        list_groups=ListGroupsUseCase(uow_factory),
        reconcile_collection_policies=ReconcileCollectionPoliciesUseCase(uow_factory),
    )


async def apply_configuration(container: Container, settings: Settings) -> ReconciliationReport:
    """Reconcile collection policy grants with the configured resource classes."""
    return await container.reconcile_collection_policies.execute(
        resource_class.identifier for resource_class in settings.resource_classes
    )


async def run(settings: Settings) -> ReconciliationReport:
    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    await pool.open()
    try:
        container = create_container(settings, create_uow_factory(pool))
        return await apply_configuration(container, settings)
    finally:
        await pool.close()


def main() -> None:
    """CLI entry point - apply configuration to the authorization store."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("resauthz v%s (%s)", __version__, settings.environment)
    report = asyncio.run(run(settings))
    if not report.changed:
        logger.info("collection policies are up to date")
