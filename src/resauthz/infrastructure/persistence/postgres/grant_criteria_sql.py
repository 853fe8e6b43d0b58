"""SQL conditions for GrantCriteria.

Conditions reference ``r`` (authorization_resource) and ``g`` (resource_action_grant).
"""

from resauthz.application.dto import GrantCriteria, HolderCriteria
from resauthz.domain.value_objects import ResourceIdentifierFilter


def _build_holder_condition(holder: HolderCriteria) -> tuple[str, list[object]]:
    """OR-combined holder condition. Empty criteria match nothing."""
    parts: list[str] = []
    params: list[object] = []
    if holder.user_identifier is not None:
        parts.append("g.user_identifier = %s")
        params.append(holder.user_identifier)
    if holder.group_ids:
        parts.append("g.group_id = ANY(%s)")
        params.append(sorted(holder.group_ids, key=str))
    if holder.dynamic_group_identifiers:
        parts.append("g.dynamic_group_identifier = ANY(%s)")
        params.append(sorted(holder.dynamic_group_identifiers))
    if not parts:
        return "FALSE", []
    return "(" + " OR ".join(parts) + ")", params


def _build_grant_criteria_conditions(criteria: GrantCriteria) -> tuple[list[str], list[object]]:
    """Build SQL AND conditions and params for grant criteria. Returns (conditions, params)."""
    conditions: list[str] = []
    params: list[object] = []
    if criteria.resource_class is not None:
        conditions.append("r.resource_class = %s")
        params.append(criteria.resource_class)

    identifier = criteria.resource_identifier
    if identifier is None or identifier == ResourceIdentifierFilter.IS_NULL:
        conditions.append("r.resource_identifier IS NULL")
    elif identifier == ResourceIdentifierFilter.IS_NOT_NULL:
        conditions.append("r.resource_identifier IS NOT NULL")
    elif identifier != ResourceIdentifierFilter.ANY:
        conditions.append("r.resource_identifier = %s")
        params.append(identifier)

    if criteria.resource_ids is not None:
        conditions.append("r.id = ANY(%s)")
        params.append(list(criteria.resource_ids))
    if criteria.actions is not None:
        conditions.append("g.action = ANY(%s)")
        params.append(sorted(criteria.actions))
    if criteria.holder is not None:
        condition, holder_params = _build_holder_condition(criteria.holder)
        conditions.append(condition)
        params.extend(holder_params)
    return conditions, params


def where_clause(conditions: list[str]) -> str:
    return " WHERE " + " AND ".join(conditions) if conditions else ""
