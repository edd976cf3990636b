"""HTTP client for the WooCommerce REST API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from ordersync.adapters.http_resilience import ResilientClient
from ordersync.config.woocommerce import WOOCOMMERCE_ORDERS_PATH
from ordersync.domain.ports.fetching import OrderFetchError

from .schema import ErrorResponse, OrderPayload
from .translator import parse_order, reject_order

if TYPE_CHECKING:
    from collections.abc import Callable

    from ordersync.config.http_resilience import ResilienceConfig
    from ordersync.config.woocommerce import WooCommerceConfig
    from ordersync.domain.model import RejectedOrder, UpstreamOrder

log = getLogger(__name__)


class WooCommerceAPIError(OrderFetchError):
    """Raised when the WooCommerce API cannot deliver an order page."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class WooCommerceOrderSource:
    config: WooCommerceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, *, page_size: int) -> list[UpstreamOrder | RejectedOrder]:
        return asyncio.run(self._fetch_orders_async(page_size=page_size))

    async def _fetch_orders_async(
        self, *, page_size: int
    ) -> list[UpstreamOrder | RejectedOrder]:
        try:
            client = self.client_factory(self.config.resilience)
        except httpx.InvalidURL as exc:
            raise WooCommerceAPIError(f"Invalid WooCommerce URL: {exc}") from exc
        async with client:
            payloads = await self._perform_request(client=client, page_size=page_size)

        orders: list[UpstreamOrder | RejectedOrder] = []
        for position, raw in enumerate(payloads, start=1):
            try:
                payload = OrderPayload.model_validate(raw)
            except ValidationError as exc:
                log.warning("Malformed WooCommerce order at position %s: %s", position, exc)
                orders.append(reject_order(raw, position=position, problem=str(exc)))
                continue
            orders.append(parse_order(payload))
        return orders

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        page_size: int,
    ) -> list[object]:
        auth = httpx.BasicAuth(self.config.consumer_key, self.config.consumer_secret)
        try:
            response = await client.get(
                WOOCOMMERCE_ORDERS_PATH,
                params={"per_page": page_size},
                auth=auth,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise WooCommerceAPIError(f"WooCommerce request failed: {exc}") from exc

        if response.is_error:
            raise WooCommerceAPIError(
                f"WooCommerce error {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise WooCommerceAPIError("WooCommerce returned a non-JSON payload") from exc

        if not isinstance(payload, list):
            raise WooCommerceAPIError("Unexpected WooCommerce response payload")
        return payload


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate(response.json()).message
    except (ValueError, ValidationError):
        return response.text

