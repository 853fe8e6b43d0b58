"""Current user DTO."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CurrentUser:
    """The user a resolution session answers for.

    ``user_identifier`` is None for system clients; they only match dynamic
    group grants.
    """

    user_identifier: str | None
    attributes: Mapping[str, Any] = field(default_factory=dict)
