"""Ports for fetching upstream orders."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ordersync.domain.model import RejectedOrder, UpstreamOrder


class OrderFetchError(RuntimeError):
    """Raised when the upstream order page cannot be retrieved."""


@runtime_checkable
class OrderSource(Protocol):
    """Callable port returning one page of recent upstream orders.

    Elements that could not be read are returned as :class:`RejectedOrder` so
    they are still accounted for by the caller.
    """

    def __call__(self, *, page_size: int) -> Sequence[UpstreamOrder | RejectedOrder]: ...


__all__ = ["OrderFetchError", "OrderSource"]
