"""Domain exceptions."""


class AuthorizationError(Exception):
    """Base exception for the authorization engine."""

    pass


class GrantInvalid(AuthorizationError):
    """Resource action grant is malformed (missing action, bad holder, unknown action)."""

    pass


class GroupInvalid(AuthorizationError):
    """Group is malformed."""

    pass


class GroupMemberInvalid(AuthorizationError):
    """Group member is malformed or would break the group graph (cycle, duplicate child)."""

    pass


class ResourceNotFound(AuthorizationError):
    """Authorization resource was not found."""

    def __init__(self, resource_class: str, resource_identifier: str | None) -> None:
        super().__init__(
            f"authorization resource '{resource_class}' / '{resource_identifier}' not found"
        )
        self.resource_class = resource_class
        self.resource_identifier = resource_identifier


class DynamicGroupUndefined(AuthorizationError):
    """Dynamic group identifier is not configured."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"dynamic group '{identifier}' is undefined")
        self.identifier = identifier


class ConfigurationInvalid(AuthorizationError):
    """Configuration or policy expression is invalid."""

    pass


class StoreFailure(AuthorizationError):
    """Underlying persistence failed; the enclosing transaction was rolled back."""

    pass
