"""Resolution result DTOs."""

from dataclasses import dataclass

from resauthz.domain.entities import AuthorizationResource


@dataclass
class ResourceActions:
    """Actions the current user may perform on one resource."""

    resource_identifier: str | None
    actions: list[str]


@dataclass
class ReadableResource:
    """Resource the current user holds at least one grant on."""

    resource: AuthorizationResource
    writable: bool
