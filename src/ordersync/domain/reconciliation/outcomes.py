"""Result types reported by the engine and the batch runner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

ALREADY_IMPORTED = "already imported"
CLAIMED_BY_OTHER_RUN = "claimed by another run"
CUSTOMER_RESOLUTION_FAILED = "customer resolution failed"
NO_VALID_LINES = "no valid lines"
ORDER_CREATION_FAILED = "order creation failed"
INVALID_PAYLOAD = "unexpected error: invalid payload"


class SyncStatus(StrEnum):
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SyncOutcome:
    """Terminal state of one order's reconciliation."""

    order_id: str
    origin_tag: str
    status: SyncStatus
    reason: str | None = None
    downstream_id: int | None = None

    @classmethod
    def created(cls, order_id: str, origin_tag: str, downstream_id: int) -> SyncOutcome:
        return cls(order_id, origin_tag, SyncStatus.CREATED, downstream_id=downstream_id)

    @classmethod
    def skipped(cls, order_id: str, origin_tag: str, reason: str) -> SyncOutcome:
        return cls(order_id, origin_tag, SyncStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, order_id: str, origin_tag: str, reason: str) -> SyncOutcome:
        return cls(order_id, origin_tag, SyncStatus.FAILED, reason=reason)

    def describe(self) -> str:
        if self.status is SyncStatus.CREATED:
            return f"{self.origin_tag}: created (downstream id {self.downstream_id})"
        return f"{self.origin_tag}: {self.status} ({self.reason})"


@dataclass(slots=True)
class RunSummary:
    """Outcome of a single reconciliation pass."""

    fetched: int = 0
    created: int = 0
    skipped: int = 0
    failed: int = 0
    outcomes: list[SyncOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def messages(self) -> list[str]:
        if self.error is not None:
            return [f"run failed: {self.error}"]
        return [outcome.describe() for outcome in self.outcomes]

    def record(self, outcome: SyncOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.status is SyncStatus.CREATED:
            self.created += 1
        elif outcome.status is SyncStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
