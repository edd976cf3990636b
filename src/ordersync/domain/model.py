"""Domain types shared by the reconciliation engine and its adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum


class EntityKind(StrEnum):
    """Downstream record kinds the engine reads or writes."""

    CUSTOMER = "customer"
    PRODUCT = "product"
    ORDER = "order"


@dataclass(frozen=True, slots=True)
class BillingInfo:
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    street: str = ""
    city: str = ""


@dataclass(frozen=True, slots=True)
class LineItem:
    """One ordered item as reported upstream.

    ``quantity`` and ``price`` keep the upstream textual form; they are parsed
    only when translated into downstream values.
    """

    name: str
    quantity: str
    price: str
    sku: str | None = None

    @property
    def natural_key(self) -> str:
        return self.sku or self.name


@dataclass(frozen=True, slots=True)
class UpstreamOrder:
    id: str
    billing: BillingInfo = field(default_factory=BillingInfo)
    line_items: tuple[LineItem, ...] = ()


@dataclass(frozen=True, slots=True)
class KeyFilter:
    """Equality filter over a single natural-key field."""

    field: str
    value: str


@dataclass(frozen=True, slots=True)
class OrderLine:
    product_id: int
    name: str
    quantity: Decimal
    price_unit: Decimal

    def as_values(self) -> dict[str, object]:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "product_uom_qty": self.quantity,
            "price_unit": self.price_unit,
        }


def origin_tag(prefix: str, order_id: str | int) -> str:
    """Return the de-duplication key linking an upstream order to its downstream order."""

    return f"{prefix}{order_id}"


@dataclass(frozen=True, slots=True)
class RejectedOrder:
    """An element of the upstream page that could not be read as an order.

    ``id`` is the upstream id when one could be recovered, otherwise ``#<position>``
    within the page.
    """

    id: str
    problem: str
