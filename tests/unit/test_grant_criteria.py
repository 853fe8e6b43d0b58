"""Unit tests for GrantCriteria and HolderCriteria matching."""

from datetime import UTC, datetime
from uuid import uuid4

from resauthz.application.dto import GrantCriteria, HolderCriteria
from resauthz.domain.entities import AuthorizationResource, ResourceActionGrant
from resauthz.domain.value_objects import (
    DynamicGroupHolder,
    GroupHolder,
    ResourceIdentifierFilter,
    UserHolder,
    holder_columns,
    holder_from_columns,
)


def _resource(identifier: str | None = "42") -> AuthorizationResource:
    return AuthorizationResource(uuid4(), "doc", identifier, datetime.now(UTC))


def _grant(resource: AuthorizationResource, holder, action: str = "read") -> ResourceActionGrant:
    return ResourceActionGrant(uuid4(), resource.id, action, holder, datetime.now(UTC))


def test_holder_criteria_matches_any_holder_kind() -> None:
    """Holder criteria are OR-combined."""
    group_id = uuid4()
    criteria = HolderCriteria("alice", frozenset({group_id}), frozenset({"students"}))

    assert criteria.matches(UserHolder("alice"))
    assert criteria.matches(GroupHolder(group_id))
    assert criteria.matches(DynamicGroupHolder("students"))
    assert not criteria.matches(UserHolder("bob"))
    assert not criteria.matches(GroupHolder(uuid4()))


def test_empty_holder_criteria_match_nothing() -> None:
    """Empty criteria never match, even user holders."""
    assert HolderCriteria().is_empty
    assert not HolderCriteria().matches(UserHolder("alice"))


def test_resource_identifier_filters() -> None:
    """ANY, None, IS_NULL, IS_NOT_NULL and concrete identifiers."""
    item, collection = _resource("42"), _resource(None)

    assert GrantCriteria().matches_resource(item)
    assert GrantCriteria().matches_resource(collection)
    assert GrantCriteria(resource_identifier=None).matches_resource(collection)
    assert not GrantCriteria(resource_identifier=None).matches_resource(item)
    assert GrantCriteria(
        resource_identifier=ResourceIdentifierFilter.IS_NULL
    ).matches_resource(collection)
    assert GrantCriteria(
        resource_identifier=ResourceIdentifierFilter.IS_NOT_NULL
    ).matches_resource(item)
    assert GrantCriteria(resource_identifier="42").matches_resource(item)
    assert not GrantCriteria(resource_identifier="43").matches_resource(item)
    assert not GrantCriteria(resource_class="form").matches_resource(item)


def test_grant_criteria_matches_grant() -> None:
    """Actions, resource ids and holder all have to match."""
    resource = _resource()
    grant = _grant(resource, UserHolder("alice"))

    assert GrantCriteria(actions=frozenset({"read"})).matches(grant, resource)
    assert not GrantCriteria(actions=frozenset({"write"})).matches(grant, resource)
    assert not GrantCriteria(resource_ids=frozenset({uuid4()})).matches(grant, resource)
    assert not GrantCriteria(holder=HolderCriteria("bob")).matches(grant, resource)
    assert not GrantCriteria().matches(grant, _resource())


def test_holder_columns_roundtrip_per_kind() -> None:
    """Each holder kind occupies exactly one column."""
    group_id = uuid4()
    assert holder_columns(UserHolder("alice")) == ("alice", None, None)
    assert holder_columns(GroupHolder(group_id)) == (None, group_id, None)
    assert holder_columns(DynamicGroupHolder("students")) == (None, None, "students")
    assert holder_from_columns(None, group_id, None) == GroupHolder(group_id)
