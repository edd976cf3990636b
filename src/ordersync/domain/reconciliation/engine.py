"""Per-order reconciliation against the downstream ERP.

Each order walks a fixed sequence: existence check by origin tag, customer
resolution, product resolution per line item, then order creation. The first
failing step decides the terminal :class:`SyncOutcome`. Records created before
a later step fails (a new customer, say) are kept; nothing is rolled back.
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from ordersync.config.sync import DEFAULT_ORIGIN_PREFIX
from ordersync.domain.model import EntityKind, KeyFilter, origin_tag
from ordersync.domain.ports.gateway import GatewayError
from ordersync.domain.ports.locking import OriginLockedError

from .outcomes import (
    ALREADY_IMPORTED,
    CLAIMED_BY_OTHER_RUN,
    CUSTOMER_RESOLUTION_FAILED,
    NO_VALID_LINES,
    ORDER_CREATION_FAILED,
    SyncOutcome,
)
from .resolver import RecordResolver
from .translator import ORDER_KEY_FIELD, OrderTranslator

if TYPE_CHECKING:
    from contextlib import AbstractContextManager

    from ordersync.domain.model import OrderLine, UpstreamOrder
    from ordersync.domain.ports.gateway import ErpGateway
    from ordersync.domain.ports.locking import OriginLock

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    gateway: ErpGateway
    translator: OrderTranslator = field(default_factory=OrderTranslator)
    origin_prefix: str = DEFAULT_ORIGIN_PREFIX
    lock: OriginLock | None = None
    resolver: RecordResolver = field(init=False)

    def __post_init__(self) -> None:
        self.resolver = RecordResolver(self.gateway)

    def sync_one(self, order: UpstreamOrder) -> SyncOutcome:
        """Reconcile ``order``; unexpected exceptions propagate to the caller."""

        tag = origin_tag(self.origin_prefix, order.id)
        try:
            with self._hold(tag):
                return self._sync_locked(order, tag)
        except OriginLockedError as exc:
            log.warning("Order %s skipped: %s", tag, exc)
            return SyncOutcome.skipped(order.id, tag, CLAIMED_BY_OTHER_RUN)

    def _hold(self, tag: str) -> AbstractContextManager[None]:
        if self.lock is None:
            return nullcontext()
        return self.lock.hold(tag)

    def _sync_locked(self, order: UpstreamOrder, tag: str) -> SyncOutcome:
        if self.gateway.find(EntityKind.ORDER, KeyFilter(ORDER_KEY_FIELD, tag)):
            log.info("Order %s already imported", tag)
            return SyncOutcome.skipped(order.id, tag, ALREADY_IMPORTED)

        log.info("Processing order %s", tag)
        customer_filter, customer_values = self.translator.translate_customer(order)
        customer_id = self.resolver.resolve(EntityKind.CUSTOMER, customer_filter, customer_values)
        if customer_id is None:
            log.error("Order %s: could not resolve customer %s", tag, customer_filter.value)
            return SyncOutcome.failed(order.id, tag, CUSTOMER_RESOLUTION_FAILED)

        lines = self._assemble_lines(order, tag)
        if not lines:
            log.error("Order %s: no valid product lines", tag)
            return SyncOutcome.failed(order.id, tag, NO_VALID_LINES)

        values = self.translator.translate_order(
            order, origin=tag, customer_id=customer_id, lines=lines
        )
        try:
            downstream_id = self.gateway.create_order(values)
        except GatewayError as exc:
            log.error("Order %s: creation failed: %s", tag, exc)
            return SyncOutcome.failed(order.id, tag, ORDER_CREATION_FAILED)
        if isinstance(downstream_id, bool) or not isinstance(downstream_id, int):
            log.error("Order %s: creation returned no usable id: %r", tag, downstream_id)
            return SyncOutcome.failed(order.id, tag, ORDER_CREATION_FAILED)

        log.info("Order %s created (downstream id %s)", tag, downstream_id)
        return SyncOutcome.created(order.id, tag, downstream_id)

    def _assemble_lines(self, order: UpstreamOrder, tag: str) -> list[OrderLine]:
        lines: list[OrderLine] = []
        for item in order.line_items:
            product_filter, product_values = self.translator.translate_product(item)
            product_id = self.resolver.resolve(EntityKind.PRODUCT, product_filter, product_values)
            if product_id is None:
                log.warning("Order %s: dropping line %r, product unresolved", tag, item.name)
                continue
            lines.append(self.translator.translate_line(item, product_id))
        return lines
