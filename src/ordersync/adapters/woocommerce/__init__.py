"""Public interface for the WooCommerce adapter."""

from __future__ import annotations

from .client import WooCommerceAPIError, WooCommerceOrderSource
from .schema import BillingPayload, LineItemPayload, OrderPayload, OrderPayloadInput
from .translator import parse_order, reject_order

__all__ = [
    "BillingPayload",
    "LineItemPayload",
    "OrderPayload",
    "OrderPayloadInput",
    "WooCommerceAPIError",
    "WooCommerceOrderSource",
    "parse_order",
    "reject_order",
]
