"""Lock table guarding overlapping sync runs.

A run inserts a row per origin tag before its existence check and deletes it
once the order reached a terminal state. The primary key on ``origin_tag`` makes
the insert the arbitration point: a second run racing on the same order fails
the insert and skips the order. Rows older than the TTL are treated as left
behind by a crashed run and reclaimed.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.exc import IntegrityError

from ordersync.config.sync import DEFAULT_LOCK_TTL_SECONDS
from ordersync.domain.ports.locking import OriginLockedError

from .tables import metadata, origin_lock_table

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def create_lock_tables(engine: Engine) -> None:
    metadata.create_all(engine, tables=[origin_lock_table], checkfirst=True)


class SqlAlchemyOriginLock:
    def __init__(
        self,
        engine: Engine,
        *,
        holder: str,
        ttl: timedelta = timedelta(seconds=DEFAULT_LOCK_TTL_SECONDS),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._engine = engine
        self.holder = holder
        self._ttl = ttl
        self._clock = clock

    @contextmanager
    def hold(self, origin_tag: str) -> Iterator[None]:
        self._acquire(origin_tag)
        try:
            yield
        finally:
            self._release(origin_tag)

    def current_holder(self, origin_tag: str) -> str | None:
        with self._engine.connect() as connection:
            return connection.execute(
                select(origin_lock_table.c.holder).where(
                    origin_lock_table.c.origin_tag == origin_tag
                )
            ).scalar_one_or_none()

    def _acquire(self, origin_tag: str) -> None:
        now = self._clock()
        try:
            with self._engine.begin() as connection:
                stale = connection.execute(
                    delete(origin_lock_table).where(
                        and_(
                            origin_lock_table.c.origin_tag == origin_tag,
                            origin_lock_table.c.acquired_at < now - self._ttl,
                        )
                    )
                )
                if stale.rowcount:
                    log.warning("Reclaimed stale lock on %s", origin_tag)
                connection.execute(
                    insert(origin_lock_table).values(
                        origin_tag=origin_tag, holder=self.holder, acquired_at=now
                    )
                )
        except IntegrityError as exc:
            raise OriginLockedError(origin_tag, holder=self.current_holder(origin_tag)) from exc

    def _release(self, origin_tag: str) -> None:
        with self._engine.begin() as connection:
            connection.execute(
                delete(origin_lock_table).where(
                    and_(
                        origin_lock_table.c.origin_tag == origin_tag,
                        origin_lock_table.c.holder == self.holder,
                    )
                )
            )

