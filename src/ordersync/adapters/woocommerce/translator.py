"""Translate WooCommerce payloads into domain orders."""

from __future__ import annotations

from ordersync.domain.model import BillingInfo, LineItem, RejectedOrder, UpstreamOrder

from .schema import LineItemPayload, OrderPayload, OrderPayloadInput


def _ensure_order_payload(payload: OrderPayloadInput) -> OrderPayload:
    if isinstance(payload, OrderPayload):
        return payload
    return OrderPayload.model_validate(payload)


def _build_line_item(payload: LineItemPayload) -> LineItem:
    return LineItem(
        name=payload.name,
        quantity=payload.quantity,
        price=payload.price,
        sku=payload.sku,
    )


def parse_order(payload: OrderPayloadInput) -> UpstreamOrder:
    order = _ensure_order_payload(payload)
    billing = order.billing
    return UpstreamOrder(
        id=str(order.id),
        billing=BillingInfo(
            email=billing.email,
            first_name=billing.first_name,
            last_name=billing.last_name,
            phone=billing.phone,
            street=billing.address_1,
            city=billing.city,
        ),
        line_items=tuple(_build_line_item(item) for item in order.line_items),
    )


def reject_order(raw: object, *, position: int, problem: str) -> RejectedOrder:
    """Describe a page element that failed validation, keeping its id when it has one."""

    raw_id = raw.get("id") if isinstance(raw, dict) else None
    if raw_id is None or str(raw_id).strip() == "":
        return RejectedOrder(id=f"#{position}", problem=problem)
    return RejectedOrder(id=str(raw_id).strip(), problem=problem)
