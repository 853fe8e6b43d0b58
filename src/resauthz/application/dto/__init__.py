"""Application DTOs."""

from resauthz.application.dto.available_actions import ActionCatalog, AvailableActions
from resauthz.application.dto.current_user import CurrentUser
from resauthz.application.dto.grant_criteria import GrantCriteria, HolderCriteria
from resauthz.application.dto.reconciliation_report import ReconciliationReport
from resauthz.application.dto.resource_actions import ReadableResource, ResourceActions

__all__ = [
    "ActionCatalog",
    "AvailableActions",
    "CurrentUser",
    "GrantCriteria",
    "HolderCriteria",
    "ReadableResource",
    "ReconciliationReport",
    "ResourceActions",
]
