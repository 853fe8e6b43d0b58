"""Action resolution engine - answers what the current user may do."""

import logging
from collections import defaultdict
from collections.abc import Collection, Iterable
from uuid import UUID

from resauthz.application.dto import (
    AvailableActions,
    GrantCriteria,
    HolderCriteria,
    ReadableResource,
    ResourceActions,
)
from resauthz.application.ports import UnitOfWork, UnitOfWorkFactory, UserContext
from resauthz.application.services.action_registry import AvailableActionsRegistry
from resauthz.application.services.dynamic_groups import DynamicGroupEvaluator
from resauthz.application.services.group_graph import GroupGraph
from resauthz.application.services.request_cache import RequestCache
from resauthz.domain.entities import AuthorizationResource, ResourceActionGrant
from resauthz.domain.exceptions import DynamicGroupUndefined
from resauthz.domain.value_objects import MANAGE_ACTION, ResourceIdentifierFilter

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 30
MAX_PAGE_SIZE = 1024
BATCH_SIZE = 1024


def clamp_limit(limit: int) -> int:
    return max(0, min(limit, MAX_PAGE_SIZE))


class ActionResolutionEngine:
    """Shared, stateless entry point. One session per logical request."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        dynamic_groups: DynamicGroupEvaluator,
        action_registry: AvailableActionsRegistry,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._dynamic_groups = dynamic_groups
        self._registry = action_registry

    def session(self, current_user: UserContext) -> "AuthorizationSession":
        return AuthorizationSession(
            self._uow_factory, self._dynamic_groups, self._registry, current_user
        )


class AuthorizationSession:
    """Resolution queries for one user within one request.

    Group and dynamic group memberships are computed at most once and kept in
    the session's RequestCache until ``clear_request_cache`` is called.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        dynamic_groups: DynamicGroupEvaluator,
        action_registry: AvailableActionsRegistry,
        current_user: UserContext,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._dynamic_groups = dynamic_groups
        self._registry = action_registry
        self._user = current_user
        self._cache = RequestCache()

    @property
    def current_user(self) -> UserContext:
        return self._user

    @property
    def request_cache(self) -> RequestCache:
        return self._cache

    def clear_request_cache(self) -> None:
        self._cache.clear()

    # Memberships

    async def current_user_group_ids(self) -> frozenset[UUID]:
        """Persisted groups the current user belongs to, directly or transitively."""
        user_identifier = self._user.user_identifier
        if user_identifier is None:
            return frozenset()

        async def load() -> frozenset[UUID]:
            async with self._uow_factory() as uow:
                graph = GroupGraph(uow.group_members)
                group_ids = frozenset(await graph.groups_user_is_member_of(user_identifier))
            logger.debug("user %s is member of %d group(s)", user_identifier, len(group_ids))
            return group_ids

        return await self._cache.get_or_load("group_ids", load)

    async def is_current_user_member_of(self, group_id: UUID) -> bool:
        return group_id in await self.current_user_group_ids()

    def current_user_dynamic_groups(self) -> list[str]:
        """Dynamic groups (derived policy groups included) the current user is in."""
        return self._cache.get_or_compute(
            "dynamic_groups", lambda: self._dynamic_groups.members_of(self._user.attributes)
        )

    def is_current_user_member_of_dynamic_group(self, identifier: str) -> bool:
        if not self._dynamic_groups.is_defined(identifier):
            raise DynamicGroupUndefined(identifier)
        return identifier in self.current_user_dynamic_groups()

    async def _holder_criteria(self) -> HolderCriteria:
        async def load() -> HolderCriteria:
            return HolderCriteria(
                user_identifier=self._user.user_identifier,
                group_ids=await self.current_user_group_ids(),
                dynamic_group_identifiers=frozenset(self.current_user_dynamic_groups()),
            )

        return await self._cache.get_or_load("holder_criteria", load)

    # Single resource

    async def is_authorized_for(
        self, resource_class: str, resource_identifier: str | None, action: str
    ) -> bool:
        """True if the user holds ``action`` or ``manage`` on the resource."""
        holder = await self._holder_criteria()
        if holder.is_empty:
            return False
        async with self._uow_factory() as uow:
            resource = await uow.resources.get_by_class_and_identifier(
                resource_class, resource_identifier
            )
            if resource is None:
                return False
            count = await uow.grants.count(
                GrantCriteria(
                    resource_ids=frozenset({resource.id}),
                    actions=frozenset({MANAGE_ACTION, action}),
                    holder=holder,
                )
            )
        return count > 0

    async def actions_for_resource(
        self,
        resource_class: str,
        resource_identifier: str | None,
        actions: Collection[str] | None = None,
    ) -> set[str]:
        """Actions the user may perform on one resource, optionally restricted to ``actions``.

        ``manage`` expands to the full catalog of the resource (item or collection).
        """
        holder = await self._holder_criteria()
        if holder.is_empty:
            return set()
        async with self._uow_factory() as uow:
            resource = await uow.resources.get_by_class_and_identifier(
                resource_class, resource_identifier
            )
            if resource is None:
                return set()
            grants = await self._all_grants(
                uow, GrantCriteria(resource_ids=frozenset({resource.id}), holder=holder)
            )
        return set(self._granted_actions(resource, grants, actions))

    # Resource class

    async def actions_page_for_resource_class(
        self,
        resource_class: str,
        actions: Collection[str] | None = None,
        exclude_collection_resource: bool = True,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[ResourceActions]:
        """One page of (resource identifier, actions) for resources of a class.

        Resources whose resolved action set is empty are skipped before offset
        and limit apply, so pages are always full until the data runs out.
        """
        limit = clamp_limit(limit)
        offset = max(0, offset)
        holder = await self._holder_criteria()
        if holder.is_empty or limit == 0:
            return []

        criteria = GrantCriteria(
            resource_class=resource_class,
            resource_identifier=(
                ResourceIdentifierFilter.IS_NOT_NULL
                if exclude_collection_resource
                else ResourceIdentifierFilter.ANY
            ),
            actions=frozenset(actions) | {MANAGE_ACTION} if actions is not None else None,
            holder=holder,
        )
        page: list[ResourceActions] = []
        skipped = 0
        resource_offset = 0
        async with self._uow_factory() as uow:
            while len(page) < limit:
                resources = await uow.resources.list_with_grants(
                    criteria, resource_offset, BATCH_SIZE
                )
                if not resources:
                    break
                resource_offset += len(resources)

                grants_by_resource: dict[UUID, list[ResourceActionGrant]] = defaultdict(list)
                for grant in await self._all_grants(
                    uow,
                    GrantCriteria(resource_ids=frozenset(r.id for r in resources), holder=holder),
                ):
                    grants_by_resource[grant.resource_id].append(grant)

                for resource in resources:
                    granted = self._granted_actions(
                        resource, grants_by_resource[resource.id], actions
                    )
                    if not granted:
                        continue
                    if skipped < offset:
                        skipped += 1
                        continue
                    page.append(ResourceActions(resource.resource_identifier, granted))
                    if len(page) == limit:
                        break

                if len(resources) < BATCH_SIZE:
                    break
        return page

    async def classes_current_user_may_read(self) -> set[str]:
        """Resource classes with at least one resource the user holds a grant on.

        Includes target classes of grant inheritance edges whose source resource
        the user holds a grant on.
        """
        holder = await self._holder_criteria()
        if holder.is_empty:
            return set()
        criteria = GrantCriteria(holder=holder)
        async with self._uow_factory() as uow:
            classes = await uow.resources.list_resource_classes_with_grants(criteria)
            classes |= await uow.grant_inheritances.list_target_resource_classes(criteria)
        return classes

    async def readable_action_catalogs(
        self, offset: int = 0, limit: int = DEFAULT_PAGE_SIZE
    ) -> list[AvailableActions]:
        """Catalogs of the readable resource classes, sorted by class name."""
        classes = sorted(await self.classes_current_user_may_read())
        offset = max(0, offset)
        return [
            self._registry.get(resource_class)
            for resource_class in classes[offset : offset + clamp_limit(limit)]
        ]

    async def resources_user_may_read(
        self,
        resource_class: str | None = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[ReadableResource]:
        """Resources the user holds any grant on; writable if a manage grant is among them."""
        limit = clamp_limit(limit)
        holder = await self._holder_criteria()
        if holder.is_empty or limit == 0:
            return []
        async with self._uow_factory() as uow:
            resources = await uow.resources.list_with_grants(
                GrantCriteria(resource_class=resource_class, holder=holder),
                max(0, offset),
                limit,
            )
            if not resources:
                return []
            manage_grants = await self._all_grants(
                uow,
                GrantCriteria(
                    resource_ids=frozenset(r.id for r in resources),
                    actions=frozenset({MANAGE_ACTION}),
                    holder=holder,
                ),
            )
        writable = {grant.resource_id for grant in manage_grants}
        return [ReadableResource(resource, resource.id in writable) for resource in resources]

    # Helpers

    async def _all_grants(
        self, uow: UnitOfWork, criteria: GrantCriteria
    ) -> list[ResourceActionGrant]:
        grants: list[ResourceActionGrant] = []
        while True:
            batch = await uow.grants.find(criteria, len(grants), BATCH_SIZE)
            grants.extend(batch)
            if len(batch) < BATCH_SIZE:
                return grants

    def _granted_actions(
        self,
        resource: AuthorizationResource,
        grants: Iterable[ResourceActionGrant],
        actions: Collection[str] | None,
    ) -> list[str]:
        """Resolved actions of one resource, in catalog order then by name."""
        catalog = list(
            self._registry.catalog_for(resource.resource_class, resource.resource_identifier)
        )
        granted = {grant.action for grant in grants}
        if MANAGE_ACTION in granted:
            granted.update(catalog)
        if actions is not None:
            granted.intersection_update(actions)
        position = {action: i for i, action in enumerate(catalog)}
        return sorted(granted, key=lambda a: (position.get(a, len(position)), a))
