"""Pytest fixtures for resauthz tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Collection
from contextlib import asynccontextmanager
from uuid import UUID

import pytest

from resauthz.application.dto import CurrentUser, GrantCriteria
from resauthz.application.services import (
    ActionResolutionEngine,
    AvailableActionsRegistry,
    DynamicGroupEvaluator,
)
from resauthz.domain.entities import (
    AuthorizationResource,
    DynamicGroup,
    GrantInheritance,
    Group,
    GroupMember,
    ResourceActionGrant,
)
from resauthz.domain.exceptions import StoreFailure
from resauthz.domain.value_objects import ChildGroupMember, GroupHolder, UserMember
from resauthz.infrastructure.expression.ast_evaluator import AstExpressionEvaluator


# --- In-memory store ---


class InMemoryStore:
    """Tables shared by all fake units of work of one test.

    Dict insertion order is the creation order; ``fail_on`` injects store failures.
    """

    def __init__(self) -> None:
        self.resources: dict[UUID, AuthorizationResource] = {}
        self.grants: dict[UUID, ResourceActionGrant] = {}
        self.groups: dict[UUID, Group] = {}
        self.group_members: dict[UUID, GroupMember] = {}
        self.grant_inheritances: dict[UUID, GrantInheritance] = {}
        self.group_lookups = 0
        self._failures: dict[str, Callable[[object], bool]] = {}

    def fail_on(self, operation: str, predicate: Callable[[object], bool] = lambda _: True) -> None:
        self._failures[operation] = predicate

    def check(self, operation: str, obj: object) -> None:
        predicate = self._failures.get(operation)
        if predicate is not None and predicate(obj):
            raise StoreFailure(f"injected failure on {operation}")

    def snapshot(self) -> tuple[dict, ...]:
        return (
            dict(self.resources),
            dict(self.grants),
            dict(self.groups),
            dict(self.group_members),
            dict(self.grant_inheritances),
        )

    def restore(self, snapshot: tuple[dict, ...]) -> None:
        (
            self.resources,
            self.grants,
            self.groups,
            self.group_members,
            self.grant_inheritances,
        ) = (dict(table) for table in snapshot)

    def ordered_resources(self) -> list[AuthorizationResource]:
        return sorted(self.resources.values(), key=lambda r: r.created_at)

    def matching_grants(self, criteria: GrantCriteria) -> list[ResourceActionGrant]:
        """Matching grants by resource creation order, then grant creation order."""
        by_resource: dict[UUID, list[ResourceActionGrant]] = {}
        for grant in sorted(self.grants.values(), key=lambda g: g.created_at):
            by_resource.setdefault(grant.resource_id, []).append(grant)
        return [
            grant
            for resource in self.ordered_resources()
            for grant in by_resource.get(resource.id, [])
            if criteria.matches(grant, resource)
        ]


# --- Fake repositories ---


class FakeResourceRepository:
    """In-memory authorization resource repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, resource_id: UUID) -> AuthorizationResource | None:
        return self._store.resources.get(resource_id)

    async def get_by_class_and_identifier(
        self, resource_class: str, resource_identifier: str | None
    ) -> AuthorizationResource | None:
        for resource in self._store.resources.values():
            if (
                resource.resource_class == resource_class
                and resource.resource_identifier == resource_identifier
            ):
                return resource
        return None

    async def list_by_class_and_identifiers(
        self, resource_class: str, resource_identifiers: Collection[str] | None
    ) -> list[AuthorizationResource]:
        return [
            r
            for r in self._store.ordered_resources()
            if r.resource_class == resource_class
            and (resource_identifiers is None or r.resource_identifier in resource_identifiers)
        ]

    async def list_collection_resources(self) -> list[AuthorizationResource]:
        return [r for r in self._store.ordered_resources() if r.resource_identifier is None]

    async def list_with_grants(
        self, criteria: GrantCriteria, offset: int = 0, limit: int = 1024
    ) -> list[AuthorizationResource]:
        resource_ids = {g.resource_id for g in self._store.matching_grants(criteria)}
        resources = [r for r in self._store.ordered_resources() if r.id in resource_ids]
        return resources[offset : offset + limit]

    async def list_resource_classes_with_grants(self, criteria: GrantCriteria) -> set[str]:
        return {
            self._store.resources[g.resource_id].resource_class
            for g in self._store.matching_grants(criteria)
        }

    async def create(self, resource: AuthorizationResource) -> AuthorizationResource:
        self._store.check("resources.create", resource)
        if await self.get_by_class_and_identifier(
            resource.resource_class, resource.resource_identifier
        ):
            raise StoreFailure("duplicate authorization resource")
        self._store.resources[resource.id] = resource
        return resource

    async def delete(self, resource_ids: Collection[UUID]) -> None:
        for resource_id in resource_ids:
            self._store.resources.pop(resource_id, None)


class FakeGrantRepository:
    """In-memory resource action grant repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, grant_id: UUID) -> ResourceActionGrant | None:
        return self._store.grants.get(grant_id)

    async def find(
        self, criteria: GrantCriteria, offset: int = 0, limit: int = 1024
    ) -> list[ResourceActionGrant]:
        return self._store.matching_grants(criteria)[offset : offset + limit]

    async def count(self, criteria: GrantCriteria) -> int:
        return len(self._store.matching_grants(criteria))

    async def create(self, grant: ResourceActionGrant) -> ResourceActionGrant:
        self._store.check("grants.create", grant)
        if grant.resource_id not in self._store.resources:
            raise StoreFailure("grant references a missing resource")
        if isinstance(grant.holder, GroupHolder) and grant.holder.group_id not in self._store.groups:
            raise StoreFailure("grant references a missing group")
        self._store.grants[grant.id] = grant
        return grant

    async def delete(self, grant_id: UUID) -> None:
        self._store.grants.pop(grant_id, None)

    async def delete_matching(self, criteria: GrantCriteria) -> int:
        matching = self._store.matching_grants(criteria)
        for grant in matching:
            del self._store.grants[grant.id]
        return len(matching)

    async def delete_by_resource_ids(self, resource_ids: Collection[UUID]) -> int:
        doomed = [g.id for g in self._store.grants.values() if g.resource_id in resource_ids]
        for grant_id in doomed:
            del self._store.grants[grant_id]
        return len(doomed)

    async def delete_by_group(self, group_id: UUID) -> int:
        doomed = [g.id for g in self._store.grants.values() if g.holder == GroupHolder(group_id)]
        for grant_id in doomed:
            del self._store.grants[grant_id]
        return len(doomed)


class FakeGroupRepository:
    """In-memory group repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, group_id: UUID) -> Group | None:
        return self._store.groups.get(group_id)

    async def list_all(self, offset: int = 0, limit: int = 30) -> list[Group]:
        groups = sorted(self._store.groups.values(), key=lambda g: (g.name, str(g.id)))
        return groups[offset : offset + limit]

    async def create(self, group: Group) -> Group:
        self._store.check("groups.create", group)
        self._store.groups[group.id] = group
        return group

    async def delete(self, group_id: UUID) -> None:
        self._store.groups.pop(group_id, None)


class FakeGroupMemberRepository:
    """In-memory group member repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, member_id: UUID) -> GroupMember | None:
        return self._store.group_members.get(member_id)

    async def list_by_group(
        self, group_id: UUID, offset: int = 0, limit: int = 30
    ) -> list[GroupMember]:
        members = [m for m in self._store.group_members.values() if m.group_id == group_id]
        return members[offset : offset + limit]

    async def list_child_group_ids(self, group_id: UUID) -> list[UUID]:
        return [
            m.member.child_group_id
            for m in self._store.group_members.values()
            if m.group_id == group_id and isinstance(m.member, ChildGroupMember)
        ]

    async def list_parent_group_ids(self, group_id: UUID) -> list[UUID]:
        return [
            m.group_id
            for m in self._store.group_members.values()
            if m.member == ChildGroupMember(group_id)
        ]

    async def list_group_ids_for_user(self, user_identifier: str) -> list[UUID]:
        self._store.group_lookups += 1
        return list(
            dict.fromkeys(
                m.group_id
                for m in self._store.group_members.values()
                if m.member == UserMember(user_identifier)
            )
        )

    async def has_user_member(self, group_id: UUID, user_identifier: str) -> bool:
        return any(
            m.group_id == group_id and m.member == UserMember(user_identifier)
            for m in self._store.group_members.values()
        )

    async def create(self, member: GroupMember) -> GroupMember:
        self._store.check("group_members.create", member)
        self._store.group_members[member.id] = member
        return member

    async def delete(self, member_id: UUID) -> None:
        self._store.group_members.pop(member_id, None)

    async def delete_by_group(self, group_id: UUID) -> None:
        doomed = [
            m.id
            for m in self._store.group_members.values()
            if m.group_id == group_id or m.member == ChildGroupMember(group_id)
        ]
        for member_id in doomed:
            del self._store.group_members[member_id]


class FakeGrantInheritanceRepository:
    """In-memory grant inheritance repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(
        self, source_resource_id: UUID, target_resource_id: UUID
    ) -> GrantInheritance | None:
        for inheritance in self._store.grant_inheritances.values():
            if (inheritance.source_resource_id, inheritance.target_resource_id) == (
                source_resource_id,
                target_resource_id,
            ):
                return inheritance
        return None

    async def list_target_resource_classes(self, source_criteria: GrantCriteria) -> set[str]:
        sources = {g.resource_id for g in self._store.matching_grants(source_criteria)}
        return {
            self._store.resources[i.target_resource_id].resource_class
            for i in self._store.grant_inheritances.values()
            if i.source_resource_id in sources
        }

    async def create(self, inheritance: GrantInheritance) -> GrantInheritance:
        self._store.grant_inheritances[inheritance.id] = inheritance
        return inheritance

    async def delete(self, inheritance_id: UUID) -> None:
        self._store.grant_inheritances.pop(inheritance_id, None)

    async def delete_by_resource_ids(self, resource_ids: Collection[UUID]) -> None:
        doomed = [
            i.id
            for i in self._store.grant_inheritances.values()
            if i.source_resource_id in resource_ids or i.target_resource_id in resource_ids
        ]
        for inheritance_id in doomed:
            del self._store.grant_inheritances[inheritance_id]


class FakeUnitOfWork:
    """In-memory Unit of Work over a shared InMemoryStore."""

    def __init__(self, store: InMemoryStore) -> None:
        self.resources = FakeResourceRepository(store)
        self.grants = FakeGrantRepository(store)
        self.groups = FakeGroupRepository(store)
        self.group_members = FakeGroupMemberRepository(store)
        self.grant_inheritances = FakeGrantInheritanceRepository(store)
        self.committed = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        pass


def make_uow_factory(store: InMemoryStore):
    """Factory of async context managers: commit on success, restore the store on error."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        uow = FakeUnitOfWork(store)
        snapshot = store.snapshot()
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            store.restore(snapshot)
            raise

    return factory


# --- Fixtures ---


DOC_ITEM_ACTIONS = {
    "read": {"en": "Read", "de": "Lesen"},
    "write": {"en": "Write", "de": "Schreiben"},
    "delete": {"en": "Delete", "de": "Löschen"},
}
DOC_COLLECTION_ACTIONS = {
    "create": {"en": "Create", "de": "Erstellen"},
}


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh in-memory tables for each test."""
    return InMemoryStore()


@pytest.fixture
def uow_factory(store: InMemoryStore):
    """Factory returning async context manager with FakeUnitOfWork."""
    return make_uow_factory(store)


@pytest.fixture
def registry() -> AvailableActionsRegistry:
    """Registry with the 'doc' resource class."""
    registry = AvailableActionsRegistry()
    registry.register("doc", DOC_ITEM_ACTIONS, DOC_COLLECTION_ACTIONS)
    return registry


@pytest.fixture
def dynamic_groups() -> DynamicGroupEvaluator:
    """Dynamic groups 'students' and 'admins', and the collection policy of 'doc'."""
    return DynamicGroupEvaluator(
        [
            DynamicGroup("students", 'user.get("IS_STUDENT") == true'),
            DynamicGroup("admins", 'user.get("ROLE_ADMIN", false)'),
        ],
        AstExpressionEvaluator(),
        collection_policies={"doc": 'user.get("MAY_CREATE_DOCS", false)'},
    )


@pytest.fixture
def engine(uow_factory, dynamic_groups, registry) -> ActionResolutionEngine:
    return ActionResolutionEngine(uow_factory, dynamic_groups, registry)


@pytest.fixture
def session_for(engine: ActionResolutionEngine):
    """Open an AuthorizationSession for a user identifier and attributes."""

    def _session(user_identifier: str | None, **attributes: object):
        return engine.session(CurrentUser(user_identifier, attributes))

    return _session
