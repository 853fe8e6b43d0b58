"""Unit tests for AstExpressionEvaluator."""

import pytest

from resauthz.domain.exceptions import ConfigurationInvalid
from resauthz.infrastructure.expression.ast_evaluator import AstExpressionEvaluator


@pytest.fixture
def evaluator() -> AstExpressionEvaluator:
    return AstExpressionEvaluator()


@pytest.mark.parametrize(
    ("expression", "attributes", "expected"),
    [
        ("true", {}, True),
        ("false", {}, False),
        ('user.get("IS_STUDENT")', {"IS_STUDENT": True}, True),
        ('user.get("IS_STUDENT")', {}, False),
        ('user.get("ROLE", null) == "admin"', {"ROLE": "admin"}, True),
        ('user["SCOPE"] in ["a", "b"]', {"SCOPE": "b"}, True),
        ('user.get("AGE", 0) >= 18 and not user.get("BLOCKED", false)', {"AGE": 20}, True),
        ('user.get("AGE", 0) + 1 > 18', {"AGE": 17}, False),
        ('"x" if user.get("A") else "y"', {"A": True}, True),
    ],
)
def test_evaluates_expression(
    evaluator: AstExpressionEvaluator, expression: str, attributes: dict, expected: bool
) -> None:
    """Compiled predicates evaluate against the attribute map."""
    assert evaluator.compile(expression)(attributes) is expected


@pytest.mark.parametrize(
    "expression",
    [
        "",
        "   ",
        "user.get(",
        "__import__('os')",
        "open('/etc/passwd')",
        "user.__class__",
        "user.keys()",
        "[x for x in user]",
        "lambda: 1",
        "other.get('A')",
        "user.get(key='A')",
    ],
)
def test_rejects_expression(evaluator: AstExpressionEvaluator, expression: str) -> None:
    """Anything outside the whitelist fails at compile time."""
    with pytest.raises(ConfigurationInvalid):
        evaluator.compile(expression)


def test_evaluation_error_is_configuration_invalid(evaluator: AstExpressionEvaluator) -> None:
    """Runtime errors (missing key) surface as ConfigurationInvalid."""
    predicate = evaluator.compile('user["MISSING"] == 1')
    with pytest.raises(ConfigurationInvalid, match="MISSING"):
        predicate({})


def test_attributes_not_mutated(evaluator: AstExpressionEvaluator) -> None:
    """Predicates see a copy of the attributes."""
    attributes = {"A": 1}
    evaluator.compile('user.get("A") == 1')(attributes)
    assert attributes == {"A": 1}
