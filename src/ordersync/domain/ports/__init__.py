"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import OrderFetchError, OrderSource
from .gateway import ErpGateway, GatewayError, GatewayResponseError, GatewayTransportError
from .locking import OriginLock, OriginLockedError

__all__ = [
    "ErpGateway",
    "GatewayError",
    "GatewayResponseError",
    "GatewayTransportError",
    "OrderFetchError",
    "OrderSource",
    "OriginLock",
    "OriginLockedError",
]
