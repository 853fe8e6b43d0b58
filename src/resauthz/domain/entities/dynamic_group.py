"""Dynamic group - configured, never persisted."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DynamicGroup:
    """Group whose membership is computed per request from the user's attributes."""

    identifier: str
    membership_expression: str
