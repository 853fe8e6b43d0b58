"""Expression evaluator port - boolean predicates over user attributes."""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

Predicate = Callable[[Mapping[str, Any]], bool]


class ExpressionEvaluator(Protocol):
    """Compiles policy expression strings into predicates.

    Raises ConfigurationInvalid for expressions it cannot compile.
    """

    def compile(self, expression: str) -> Predicate: ...
