"""Port for the downstream ERP."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ordersync.domain.model import EntityKind, KeyFilter


class GatewayError(RuntimeError):
    """Base class for failed downstream calls."""


class GatewayTransportError(GatewayError):
    """Raised when the downstream system cannot be reached or answers non-success."""


class GatewayResponseError(GatewayError):
    """Raised when the downstream system answers with an application-level error payload."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


@runtime_checkable
class ErpGateway(Protocol):
    def find(self, kind: EntityKind, key_filter: KeyFilter) -> Sequence[Mapping[str, object]]:
        """Return the records of ``kind`` matching ``key_filter``, in downstream order."""
        ...

    def create(self, kind: EntityKind, values: Mapping[str, object]) -> int:
        """Create one record of ``kind`` and return its identifier."""
        ...

    def create_order(self, values: Mapping[str, object]) -> int:
        """Create one sales order and return its identifier."""
        ...


__all__ = ["ErpGateway", "GatewayError", "GatewayResponseError", "GatewayTransportError"]
