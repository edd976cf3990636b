"""Find-or-create resolution of downstream records by natural key."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from ordersync.domain.ports.gateway import GatewayError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ordersync.domain.model import EntityKind, KeyFilter
    from ordersync.domain.ports.gateway import ErpGateway

log = getLogger(__name__)


def _record_id(record: Mapping[str, object]) -> int | None:
    value = record.get("id")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@dataclass(slots=True)
class RecordResolver:
    """Return the identifier of the downstream record matching a natural key.

    The first match returned by the gateway wins, so pre-existing duplicates
    downstream always collapse onto the same record. When nothing matches, a
    record is created from ``values_if_absent``. Gateway failures are reported
    as ``None`` so callers can abort the current order only.
    """

    gateway: ErpGateway

    def resolve(
        self,
        kind: EntityKind,
        key_filter: KeyFilter,
        values_if_absent: Mapping[str, object],
    ) -> int | None:
        try:
            matches = self.gateway.find(kind, key_filter)
        except GatewayError as exc:
            log.warning(
                "Lookup of %s %s=%r failed: %s", kind, key_filter.field, key_filter.value, exc
            )
            return None

        if matches:
            record_id = _record_id(matches[0])
            if record_id is None:
                log.warning("Lookup of %s returned a record without an id: %r", kind, matches[0])
            return record_id

        try:
            new_id = self.gateway.create(kind, values_if_absent)
        except GatewayError as exc:
            log.warning(
                "Creating %s %s=%r failed: %s", kind, key_filter.field, key_filter.value, exc
            )
            return None

        log.info("Created %s %s=%r (id %s)", kind, key_filter.field, key_filter.value, new_id)
        return new_id
