"""Unit tests for DynamicGroupEvaluator."""

import pytest

from resauthz.application.services import DynamicGroupEvaluator
from resauthz.domain.entities import DynamicGroup
from resauthz.domain.exceptions import ConfigurationInvalid, DynamicGroupUndefined
from resauthz.infrastructure.expression.ast_evaluator import AstExpressionEvaluator


def test_is_member_of_dynamic_group(dynamic_groups: DynamicGroupEvaluator) -> None:
    """Membership follows the predicate."""
    assert dynamic_groups.is_member_of_dynamic_group("students", {"IS_STUDENT": True})
    assert not dynamic_groups.is_member_of_dynamic_group("students", {"IS_STUDENT": False})
    assert not dynamic_groups.is_member_of_dynamic_group("students", {})


def test_undefined_dynamic_group_raises(dynamic_groups: DynamicGroupEvaluator) -> None:
    """Unknown identifiers raise DynamicGroupUndefined."""
    with pytest.raises(DynamicGroupUndefined):
        dynamic_groups.is_member_of_dynamic_group("nobody", {})


def test_members_of_in_declaration_order(dynamic_groups: DynamicGroupEvaluator) -> None:
    """members_of lists every true predicate, declared groups before policy groups."""
    members = dynamic_groups.members_of(
        {"IS_STUDENT": True, "ROLE_ADMIN": True, "MAY_CREATE_DOCS": True}
    )
    assert members == ["students", "admins", "manage_resource_collection:doc"]


def test_members_of_nothing(dynamic_groups: DynamicGroupEvaluator) -> None:
    """No attributes, no dynamic groups."""
    assert dynamic_groups.members_of({}) == []


def test_members_of_skips_failing_predicate() -> None:
    """A predicate that fails at runtime only excludes its own group."""
    dynamic_groups = DynamicGroupEvaluator(
        [
            DynamicGroup("broken", 'user["MISSING"] == 1'),
            DynamicGroup("everyone", "true"),
        ],
        AstExpressionEvaluator(),
    )
    assert dynamic_groups.members_of({}) == ["everyone"]
    with pytest.raises(ConfigurationInvalid):
        dynamic_groups.is_member_of_dynamic_group("broken", {})


def test_dynamic_group_identifiers_excludes_policy_groups(
    dynamic_groups: DynamicGroupEvaluator,
) -> None:
    """Derived policy groups are defined but not listed as configured groups."""
    assert dynamic_groups.dynamic_group_identifiers() == ["students", "admins"]
    assert dynamic_groups.is_defined("manage_resource_collection:doc")


def test_invalid_expression_fails_at_construction() -> None:
    """Expressions compile eagerly."""
    with pytest.raises(ConfigurationInvalid):
        DynamicGroupEvaluator([DynamicGroup("broken", "user.get(")], AstExpressionEvaluator())


def test_duplicate_identifier_rejected() -> None:
    """Each identifier may be defined once."""
    with pytest.raises(ConfigurationInvalid):
        DynamicGroupEvaluator(
            [DynamicGroup("a", "true"), DynamicGroup("a", "false")], AstExpressionEvaluator()
        )


def test_custom_evaluator_is_used() -> None:
    """Any ExpressionEvaluator can be plugged in."""

    class KeyEvaluator:
        def compile(self, expression: str):
            return lambda attributes: bool(attributes.get(expression))

    evaluator = DynamicGroupEvaluator([DynamicGroup("staff", "IS_STAFF")], KeyEvaluator())
    assert evaluator.members_of({"IS_STAFF": 1}) == ["staff"]
