"""Idempotent reconciliation of upstream orders into the downstream ERP."""

from __future__ import annotations

from .engine import ReconciliationEngine
from .outcomes import RunSummary, SyncOutcome, SyncStatus
from .resolver import RecordResolver
from .runner import BatchRunner
from .translator import OrderTranslator, parse_decimal

__all__ = [
    "BatchRunner",
    "OrderTranslator",
    "ReconciliationEngine",
    "RecordResolver",
    "RunSummary",
    "SyncOutcome",
    "SyncStatus",
    "parse_decimal",
]
