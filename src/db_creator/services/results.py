"""
db_creator.services.results

Result types returned by the provisioning service.

Responsibilities:
- `DbOutcome`: per-database creation outcome.
- `OperationResult`: the single value every provisioning call returns.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass, field


class ProvisioningMode(enum.StrEnum):
    single = "single"
    batch = "batch"


@dataclass(frozen=True, slots=True)
class DbOutcome:
    name: str
    created: bool


@dataclass(frozen=True, slots=True)
class OperationResult:
    """
    `success` means "at least one created" for single execution and
    "all created" for batch.
    """

    created_names: tuple[str, ...]
    summary: str
    success: bool
    mode: ProvisioningMode | None = None
    outcomes: tuple[DbOutcome, ...] = field(default_factory=tuple)

    @property
    def failed_names(self) -> tuple[str, ...]:
        return tuple(o.name for o in self.outcomes if not o.created)


def summarize(outcomes: Sequence[DbOutcome]) -> str:
    created = sum(1 for o in outcomes if o.created)
    failed = len(outcomes) - created
    return (
        f"{created} out of {len(outcomes)} databases were created successfully. "
        f"{failed} databases failed to be created."
    )


# --- Module Notes -----------------------------------------------------------
# Results are immutable; front ends render them and never patch them.
