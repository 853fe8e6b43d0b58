"""Policy expressions as restricted Python boolean expressions.

Variables:
  user -> the current user's attributes (``user.get("ROLE_ADMIN")``, ``user["SCOPE"]``)
  true, false, null -> True, False, None
Allowed: and/or/not, comparisons, in/not in, + - * % arithmetic, conditional
expressions, literals (including lists, tuples and dicts), subscripts and
``user.get(...)``. Nothing else is callable.
"""

import ast
from collections.abc import Mapping
from types import CodeType
from typing import Any

from resauthz.application.ports import Predicate
from resauthz.domain.exceptions import ConfigurationInvalid

USER_VARIABLE = "user"

_CONSTANTS: dict[str, Any] = {
    "true": True,
    "false": False,
    "null": None,
}

_ALLOWED_AST_NODES = {
    ast.Expression, ast.BoolOp, ast.BinOp, ast.UnaryOp, ast.Compare, ast.IfExp,
    ast.Name, ast.Load, ast.Constant, ast.Subscript, ast.List, ast.Tuple, ast.Dict,
    ast.Attribute, ast.Call,
    ast.And, ast.Or, ast.Not, ast.USub, ast.Add, ast.Sub, ast.Mult, ast.Mod,
    ast.Eq, ast.NotEq, ast.Lt, ast.LtE, ast.Gt, ast.GtE, ast.In, ast.NotIn,
}


def _validate(tree: ast.Expression) -> None:
    for node in ast.walk(tree):
        if type(node) not in _ALLOWED_AST_NODES:
            raise ConfigurationInvalid(f"disallowed expression element: {type(node).__name__}")
        if isinstance(node, ast.Name) and node.id not in _CONSTANTS and node.id != USER_VARIABLE:
            raise ConfigurationInvalid(f"unknown name in expression: {node.id}")
        if isinstance(node, ast.Attribute) and not (
            isinstance(node.value, ast.Name) and node.value.id == USER_VARIABLE and node.attr == "get"
        ):
            raise ConfigurationInvalid(f"only '{USER_VARIABLE}.get' may be accessed as attribute")
        if isinstance(node, ast.Call) and (not isinstance(node.func, ast.Attribute) or node.keywords):
            raise ConfigurationInvalid(f"only '{USER_VARIABLE}.get(...)' may be called")


class AstExpressionEvaluator:
    """Default ExpressionEvaluator. Compiles once, evaluates without builtins."""

    def compile(self, expression: str) -> Predicate:
        if not isinstance(expression, str) or not expression.strip():
            raise ConfigurationInvalid("policy expression must not be empty")
        try:
            tree = ast.parse(expression.strip(), mode="eval")
        except SyntaxError as e:
            raise ConfigurationInvalid(f"invalid policy expression '{expression}': {e}") from e
        _validate(tree)
        code = compile(tree, "<policy>", "eval")
        return _CompiledPredicate(expression, code)


class _CompiledPredicate:
    def __init__(self, expression: str, code: CodeType) -> None:
        self.expression = expression
        self._code = code

    def __call__(self, attributes: Mapping[str, Any]) -> bool:
        variables = {**_CONSTANTS, USER_VARIABLE: dict(attributes)}
        try:
            return bool(eval(self._code, {"__builtins__": {}}, variables))
        except Exception as e:
            raise ConfigurationInvalid(
                f"failed to evaluate policy expression '{self.expression}': {e}"
            ) from e

    def __repr__(self) -> str:
        return f"<predicate {self.expression!r}>"
