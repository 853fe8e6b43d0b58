"""Unit tests for grant_criteria_sql._build_grant_criteria_conditions."""

from uuid import uuid4

from resauthz.application.dto import GrantCriteria, HolderCriteria
from resauthz.domain.value_objects import ResourceIdentifierFilter
from resauthz.infrastructure.persistence.postgres.grant_criteria_sql import (
    _build_grant_criteria_conditions,
    where_clause,
)


class TestBuildGrantCriteriaConditions:
    """Tests for _build_grant_criteria_conditions."""

    def test_empty_criteria(self) -> None:
        conditions, params = _build_grant_criteria_conditions(GrantCriteria())
        assert conditions == []
        assert params == []

    def test_resource_class_and_identifier(self) -> None:
        conditions, params = _build_grant_criteria_conditions(
            GrantCriteria(resource_class="doc", resource_identifier="42")
        )
        assert conditions == ["r.resource_class = %s", "r.resource_identifier = %s"]
        assert params == ["doc", "42"]

    def test_none_identifier_is_collection(self) -> None:
        conditions, params = _build_grant_criteria_conditions(
            GrantCriteria(resource_identifier=None)
        )
        assert conditions == ["r.resource_identifier IS NULL"]
        assert params == []

    def test_identifier_sentinels(self) -> None:
        is_null, _ = _build_grant_criteria_conditions(
            GrantCriteria(resource_identifier=ResourceIdentifierFilter.IS_NULL)
        )
        is_not_null, _ = _build_grant_criteria_conditions(
            GrantCriteria(resource_identifier=ResourceIdentifierFilter.IS_NOT_NULL)
        )
        assert is_null == ["r.resource_identifier IS NULL"]
        assert is_not_null == ["r.resource_identifier IS NOT NULL"]

    def test_resource_ids_and_actions(self) -> None:
        resource_id = uuid4()
        conditions, params = _build_grant_criteria_conditions(
            GrantCriteria(resource_ids=frozenset({resource_id}), actions=frozenset({"write", "read"}))
        )
        assert conditions == ["r.id = ANY(%s)", "g.action = ANY(%s)"]
        assert params == [[resource_id], ["read", "write"]]

    def test_holder_is_or_combined(self) -> None:
        group_id = uuid4()
        conditions, params = _build_grant_criteria_conditions(
            GrantCriteria(
                holder=HolderCriteria(
                    user_identifier="alice",
                    group_ids=frozenset({group_id}),
                    dynamic_group_identifiers=frozenset({"students"}),
                )
            )
        )
        assert conditions == [
            "(g.user_identifier = %s OR g.group_id = ANY(%s) "
            "OR g.dynamic_group_identifier = ANY(%s))"
        ]
        assert params == ["alice", [group_id], ["students"]]

    def test_user_only_holder(self) -> None:
        conditions, params = _build_grant_criteria_conditions(
            GrantCriteria(holder=HolderCriteria(user_identifier="bob"))
        )
        assert conditions == ["(g.user_identifier = %s)"]
        assert params == ["bob"]

    def test_empty_holder_matches_nothing(self) -> None:
        conditions, params = _build_grant_criteria_conditions(
            GrantCriteria(holder=HolderCriteria())
        )
        assert conditions == ["FALSE"]
        assert params == []


def test_where_clause() -> None:
    assert where_clause([]) == ""
    assert where_clause(["a = %s", "b = %s"]) == " WHERE a = %s AND b = %s"
