"""Application services - group graph, dynamic groups and action resolution."""

from resauthz.application.services.action_registry import AvailableActionsRegistry
from resauthz.application.services.action_resolution import (
    ActionResolutionEngine,
    AuthorizationSession,
)
from resauthz.application.services.dynamic_groups import DynamicGroupEvaluator
from resauthz.application.services.group_graph import GroupGraph
from resauthz.application.services.request_cache import RequestCache

__all__ = [
    "ActionResolutionEngine",
    "AuthorizationSession",
    "AvailableActionsRegistry",
    "DynamicGroupEvaluator",
    "GroupGraph",
    "RequestCache",
]
