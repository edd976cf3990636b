"""SQLAlchemy adapters."""

from __future__ import annotations

from .locking import SqlAlchemyOriginLock, create_lock_tables
from .tables import metadata, origin_lock_table

__all__ = ["SqlAlchemyOriginLock", "create_lock_tables", "metadata", "origin_lock_table"]
