"""Current user context port."""

from collections.abc import Mapping
from typing import Any, Protocol


class UserContext(Protocol):
    """Identity and attributes of the user a request is resolved for."""

    @property
    def user_identifier(self) -> str | None: ...

    @property
    def attributes(self) -> Mapping[str, Any]: ...
