"""Application ports - interfaces for external adapters."""

from resauthz.application.ports.expression_evaluator import ExpressionEvaluator, Predicate
from resauthz.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory
from resauthz.application.ports.user_context import UserContext

__all__ = [
    "ExpressionEvaluator",
    "Predicate",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "UserContext",
]
