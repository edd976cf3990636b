"""JSON-RPC gateway to an Odoo instance."""

from __future__ import annotations

import asyncio
import itertools
import json
from decimal import Decimal
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from ordersync.adapters.http_resilience import ResilientClient
from ordersync.domain.model import EntityKind
from ordersync.domain.ports.gateway import GatewayResponseError, GatewayTransportError

from .schema import RpcResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence
    from types import TracebackType

    from ordersync.config.http_resilience import ResilienceConfig
    from ordersync.config.odoo import OdooConfig
    from ordersync.domain.model import KeyFilter

log = getLogger(__name__)

ODOO_MODELS: dict[EntityKind, str] = {
    EntityKind.CUSTOMER: "res.partner",
    EntityKind.PRODUCT: "product.product",
    EntityKind.ORDER: "sale.order",
}


class OdooAPIError(GatewayResponseError):
    """Raised when Odoo answers with a JSON-RPC error payload."""


def _decimal_to_float(value: object) -> float:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _encode_payload(payload: Mapping[str, object]) -> bytes:
    """Serialize a JSON-RPC payload, sending decimals as JSON numbers."""

    try:
        return json.dumps(payload, default=_decimal_to_float, allow_nan=False).encode()
    except (TypeError, ValueError) as exc:
        raise OdooAPIError(f"Cannot encode Odoo request payload: {exc}") from exc


def _created_id(result: object, *, model: str) -> int:
    if isinstance(result, list) and len(result) == 1:
        result = result[0]
    if isinstance(result, bool) or not isinstance(result, int):
        raise OdooAPIError(f"Odoo create on {model} returned no id: {result!r}")
    return result


class OdooGateway:
    """Downstream ERP gateway speaking Odoo's ``call_kw`` JSON-RPC endpoint.

    All calls share one event loop and one HTTP client, so connections and the
    configured rate limit carry over from one call to the next. Call
    :meth:`close` (or use the gateway as a context manager) when done.
    """

    def __init__(
        self,
        *,
        config: OdooConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._request_ids = itertools.count(1)
        self._runner: asyncio.Runner | None = None
        self._client: ResilientClient | None = None

    def __enter__(self) -> OdooGateway:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        runner, client = self._runner, self._client
        self._runner = None
        self._client = None
        if runner is None:
            return
        try:
            if client is not None:
                runner.run(client.aclose())
        finally:
            runner.close()

    def find(self, kind: EntityKind, key_filter: KeyFilter) -> list[Mapping[str, object]]:
        model = ODOO_MODELS[kind]
        domain = [[key_filter.field, "=", key_filter.value]]
        result = self._call(model, "search_read", [domain], {"fields": ["id"]})
        if not isinstance(result, list):
            raise OdooAPIError(f"Odoo search_read on {model} returned {result!r}")
        return [record for record in result if isinstance(record, dict)]

    def create(self, kind: EntityKind, values: Mapping[str, object]) -> int:
        model = ODOO_MODELS[kind]
        return _created_id(self._call(model, "create", [dict(values)], {}), model=model)

    def create_order(self, values: Mapping[str, object]) -> int:
        return self.create(EntityKind.ORDER, values)

    def _call(
        self,
        model: str,
        method: str,
        args: Sequence[object],
        kwargs: Mapping[str, object],
    ) -> object:
        body = _encode_payload(
            {
                "jsonrpc": "2.0",
                "method": "call",
                "id": next(self._request_ids),
                "params": {
                    "model": model,
                    "method": method,
                    "args": list(args),
                    "kwargs": dict(kwargs),
                },
            }
        )
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(self._call_async(f"/web/dataset/call_kw/{model}/{method}", body))

    async def _call_async(self, path: str, body: bytes) -> object:
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
            "X-Odoo-Database": self._config.database,
        }
        try:
            if self._client is None:
                self._client = self._client_factory(self._resilience)
            response = await self._client.post(path, content=body, headers=headers)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GatewayTransportError(f"Odoo request to {path} failed: {exc}") from exc

        try:
            envelope = RpcResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise OdooAPIError(f"Unexpected Odoo response payload from {path}") from exc

        if envelope.error is not None:
            log.error("Odoo error on %s: %s", path, envelope.error.detail)
            raise OdooAPIError(envelope.error.detail, code=envelope.error.code)
        return envelope.result
