"""Application orchestration entry points."""

from __future__ import annotations

import uuid
from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine

from ordersync.adapters.odoo import OdooGateway
from ordersync.adapters.sqlalchemy import SqlAlchemyOriginLock, create_lock_tables
from ordersync.adapters.woocommerce import WooCommerceOrderSource
from ordersync.config import (
    get_database_config,
    get_odoo_config,
    get_sync_config,
    get_woocommerce_config,
)
from ordersync.domain.reconciliation import BatchRunner, OrderTranslator, ReconciliationEngine

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from ordersync.config import SyncConfig
    from ordersync.domain.ports import ErpGateway, OrderSource, OriginLock
    from ordersync.domain.reconciliation import RunSummary


log = getLogger(__name__)


def build_runner(
    config: SyncConfig,
    *,
    source: OrderSource,
    gateway: ErpGateway,
    lock: OriginLock | None = None,
) -> BatchRunner:
    engine = ReconciliationEngine(
        gateway=gateway,
        translator=OrderTranslator.from_config(config),
        origin_prefix=config.origin_prefix,
        lock=lock,
    )
    return BatchRunner(source=source, engine=engine, page_size=config.page_size)


def sync_orders(
    *,
    config: SyncConfig | None = None,
    source: OrderSource | None = None,
    gateway: ErpGateway | None = None,
    lock: OriginLock | None = None,
    use_lock: bool = True,
) -> RunSummary:
    """Run one reconciliation pass using the configured adapters."""

    effective_config = config or get_sync_config()
    effective_source = source or WooCommerceOrderSource(config=get_woocommerce_config())
    owned_gateway: OdooGateway | None = None
    if gateway is None:
        gateway = owned_gateway = OdooGateway(config=get_odoo_config())

    lock_engine: Engine | None = None
    if lock is None and use_lock:
        lock_engine = create_engine(get_database_config().uri, future=True)
        create_lock_tables(lock_engine)
        lock = SqlAlchemyOriginLock(
            lock_engine,
            holder=f"run-{uuid.uuid4().hex[:12]}",
            ttl=timedelta(seconds=effective_config.lock_ttl_seconds),
        )

    log.info(
        "Starting order sync: page_size=%s, origin_prefix=%s, locking=%s",
        effective_config.page_size,
        effective_config.origin_prefix,
        lock is not None,
    )
    runner = build_runner(
        effective_config, source=effective_source, gateway=gateway, lock=lock
    )
    try:
        summary = runner.run_once()
    finally:
        if owned_gateway is not None:
            owned_gateway.close()
        if lock_engine is not None:
            lock_engine.dispose()

    for message in summary.messages:
        log.info("  %s", message)
    return summary
