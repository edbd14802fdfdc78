"""Result models for provisioning runs."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class Step(str, Enum):
    """A remote transition attempted for a table."""

    CREATE_GLOBAL_TABLE = "create_global_table"
    ADD_REPLICA = "add_replica"
    UPDATE_REPLICA_VERSION = "update_replica_version"


class Outcome(str, Enum):
    """How a step finished."""

    APPLIED = "applied"
    ALREADY_EXISTS = "already_exists"
    AT_TARGET_VERSION = "at_target_version"  # create/add skipped by the version gate
    NOT_AT_TARGET_VERSION = "not_at_target_version"  # legacy upgrade skipped
    SKIPPED_MASTER_REGION = "skipped_master_region"


@dataclass(frozen=True)
class TableOutcome:
    """Outcome of one step for one table in one region."""

    table_name: str
    step: Step
    outcome: Outcome
    region: str | None = None


@dataclass
class RunResult:
    """Everything a provisioning run did."""

    region: str | None
    enabled: bool = True
    outcomes: list[TableOutcome] = field(default_factory=list)

    def add(self, outcomes: Iterable[TableOutcome]) -> None:
        self.outcomes.extend(outcomes)

    def for_table(self, table_name: str) -> list[TableOutcome]:
        return [o for o in self.outcomes if o.table_name == table_name]

    def for_step(self, step: Step) -> list[TableOutcome]:
        return [o for o in self.outcomes if o.step == step]

    @property
    def applied(self) -> int:
        """Number of steps that changed remote state."""
        return sum(1 for o in self.outcomes if o.outcome == Outcome.APPLIED)

    def to_dict(self) -> dict[str, object]:
        return {
            "region": self.region,
            "enabled": self.enabled,
            "outcomes": [
                {
                    "table_name": o.table_name,
                    "step": o.step.value,
                    "outcome": o.outcome.value,
                    "region": o.region,
                }
                for o in self.outcomes
            ],
        }
