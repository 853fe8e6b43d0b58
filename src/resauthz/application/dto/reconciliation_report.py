"""Collection policy reconciliation report DTO."""

from dataclasses import dataclass, field


@dataclass
class ReconciliationReport:
    """Resource classes touched by one reconciliation run."""

    created_resources: list[str] = field(default_factory=list)
    created_grants: list[str] = field(default_factory=list)
    removed_grants: list[str] = field(default_factory=list)
    removed_resources: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(
            self.created_resources
            or self.created_grants
            or self.removed_grants
            or self.removed_resources
        )
