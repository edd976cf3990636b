"""Drive the reconciliation engine over one page of upstream orders."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from ordersync.config.sync import DEFAULT_PAGE_SIZE
from ordersync.domain.model import RejectedOrder, origin_tag
from ordersync.domain.ports.fetching import OrderFetchError

from .outcomes import INVALID_PAYLOAD, RunSummary, SyncOutcome

if TYPE_CHECKING:
    from ordersync.domain.model import UpstreamOrder
    from ordersync.domain.ports.fetching import OrderSource

    from .engine import ReconciliationEngine

log = getLogger(__name__)


@dataclass(slots=True)
class BatchRunner:
    source: OrderSource
    engine: ReconciliationEngine
    page_size: int = DEFAULT_PAGE_SIZE

    def run_once(self) -> RunSummary:
        """Fetch a single page of orders and reconcile each, isolating per-order failures."""

        summary = RunSummary()
        log.info("Fetching up to %s upstream orders", self.page_size)
        try:
            orders = list(self.source(page_size=self.page_size))
        except OrderFetchError as exc:
            log.error("Fetching upstream orders failed: %s", exc)  # noqa: TRY400
            summary.error = str(exc)
            return summary

        summary.fetched = len(orders)
        log.info("Found %s orders", summary.fetched)

        for order in orders:
            summary.record(self._sync(order))

        log.info(
            "Sync finished: fetched=%s, created=%s, skipped=%s, failed=%s",
            summary.fetched,
            summary.created,
            summary.skipped,
            summary.failed,
        )
        return summary

    def _sync(self, order: UpstreamOrder | RejectedOrder) -> SyncOutcome:
        tag = origin_tag(self.engine.origin_prefix, order.id)
        if isinstance(order, RejectedOrder):
            log.error("Order %s has an invalid payload: %s", tag, order.problem)
            return SyncOutcome.failed(order.id, tag, INVALID_PAYLOAD)
        try:
            return self.engine.sync_one(order)
        except Exception as exc:
            log.exception("Unexpected failure on order %s", order.id)
            return SyncOutcome.failed(order.id, tag, f"unexpected error: {exc}")
