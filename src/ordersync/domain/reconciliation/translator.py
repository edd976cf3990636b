"""Map upstream orders onto the downstream record shapes.

All functions here are pure: they read an :class:`UpstreamOrder` (or one of its
line items) and return filters and field values, leaving every lookup and write
to the resolver and the engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from logging import getLogger
from typing import TYPE_CHECKING

from ordersync.config.sync import (
    DEFAULT_HOME_COUNTRY_ID,
    DEFAULT_PLACEHOLDER_EMAIL_DOMAIN,
    DEFAULT_PLATFORM_LABEL,
    DEFAULT_PRODUCT_TYPE,
)
from ordersync.domain.model import KeyFilter, OrderLine

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ordersync.config.sync import SyncConfig
    from ordersync.domain.model import LineItem, UpstreamOrder

log = getLogger(__name__)

ZERO = Decimal(0)

CUSTOMER_KEY_FIELD = "email"
PRODUCT_KEY_FIELD = "default_code"
ORDER_KEY_FIELD = "origin"
DRAFT_STATE = "draft"


def parse_decimal(value: object) -> Decimal:
    """Parse an upstream numeric string, yielding zero when it is missing or malformed."""

    if value is None:
        return ZERO
    text = str(value).strip()
    if not text:
        return ZERO
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        log.warning("Could not parse %r as a number, using 0", value)
        return ZERO
    if not parsed.is_finite() or math.isinf(float(parsed)):
        log.warning("Number %r is not finite or does not fit a float, using 0", value)
        return ZERO
    return parsed


@dataclass(frozen=True, slots=True)
class OrderTranslator:
    home_country_id: int = DEFAULT_HOME_COUNTRY_ID
    placeholder_email_domain: str = DEFAULT_PLACEHOLDER_EMAIL_DOMAIN
    platform_label: str = DEFAULT_PLATFORM_LABEL
    product_type: str = DEFAULT_PRODUCT_TYPE

    @classmethod
    def from_config(cls, config: SyncConfig) -> OrderTranslator:
        return cls(
            home_country_id=config.home_country_id,
            placeholder_email_domain=config.placeholder_email_domain,
            platform_label=config.platform_label,
            product_type=config.product_type,
        )

    def customer_email(self, order: UpstreamOrder) -> str:
        email = order.billing.email.strip()
        return email or f"no-email-{order.id}@{self.placeholder_email_domain}"

    def translate_customer(self, order: UpstreamOrder) -> tuple[KeyFilter, dict[str, object]]:
        billing = order.billing
        email = self.customer_email(order)
        full_name = f"{billing.first_name} {billing.last_name}".strip()
        values: dict[str, object] = {
            "name": full_name or f"{self.platform_label} Client #{order.id}",
            "email": email,
            "phone": billing.phone,
            "street": billing.street,
            "city": billing.city,
            "country_id": self.home_country_id,
            "customer_rank": 1,
        }
        return KeyFilter(CUSTOMER_KEY_FIELD, email), values

    def translate_product(self, item: LineItem) -> tuple[KeyFilter, dict[str, object]]:
        key = item.natural_key
        values: dict[str, object] = {
            "name": item.name,
            "list_price": parse_decimal(item.price),
            "default_code": key,
            "type": self.product_type,
            "sale_ok": True,
        }
        return KeyFilter(PRODUCT_KEY_FIELD, key), values

    def translate_line(self, item: LineItem, product_id: int) -> OrderLine:
        return OrderLine(
            product_id=product_id,
            name=item.name,
            quantity=parse_decimal(item.quantity),
            price_unit=parse_decimal(item.price),
        )

    def translate_order(
        self,
        order: UpstreamOrder,
        *,
        origin: str,
        customer_id: int,
        lines: Sequence[OrderLine],
    ) -> dict[str, object]:
        return {
            "partner_id": customer_id,
            "origin": origin,
            "client_order_ref": str(order.id),
            "state": DRAFT_STATE,
            "order_line": [[0, 0, line.as_values()] for line in lines],
        }
