from __future__ import annotations

import json
from decimal import Decimal
from typing import TYPE_CHECKING

import httpx
import pytest

from ordersync.adapters.odoo import OdooAPIError, OdooGateway
from ordersync.config import get_odoo_config
from ordersync.config.http_resilience import ResilienceConfig
from ordersync.config.odoo import OdooConfig
from ordersync.domain.model import EntityKind, KeyFilter
from ordersync.domain.ports.gateway import GatewayError, GatewayTransportError
from ordersync.domain.reconciliation import RecordResolver

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from ordersync.adapters.http_resilience import ResilientClient

    Handler = Callable[[httpx.Request], httpx.Response]
    Factory = Callable[[Handler], Callable[..., ResilientClient]]


@pytest.fixture
def odoo_config() -> OdooConfig:
    return OdooConfig(
        database="shop-db",
        api_key="secret",
        resilience=ResilienceConfig(name="odoo", base_url="https://erp.test"),
    )


@pytest.fixture
def make_gateway(
    odoo_config: OdooConfig, make_client_factory: Factory
) -> Iterator[Callable[[Handler], OdooGateway]]:
    gateways: list[OdooGateway] = []

    def build(handler: Handler) -> OdooGateway:
        gateway = OdooGateway(config=odoo_config, client_factory=make_client_factory(handler))
        gateways.append(gateway)
        return gateway

    yield build
    for gateway in gateways:
        gateway.close()


def _rpc_result(result: object) -> httpx.Response:
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})


def test_find_issues_search_read(make_gateway: Callable[[Handler], OdooGateway]) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _rpc_result([{"id": 7}, {"id": 9}])

    gateway = make_gateway(handler)

    records = gateway.find(EntityKind.CUSTOMER, KeyFilter("email", "awa@example.sn"))

    assert records == [{"id": 7}, {"id": 9}]
    request = seen[0]
    assert request.url.path == "/web/dataset/call_kw/res.partner/search_read"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["X-Odoo-Database"] == "shop-db"
    assert request.headers["Content-Type"] == "application/json"
    body = json.loads(request.content)
    assert body["params"]["model"] == "res.partner"
    assert body["params"]["args"] == [[["email", "=", "awa@example.sn"]]]
    assert body["params"]["kwargs"] == {"fields": ["id"]}


def test_create_order_encodes_decimals(make_gateway: Callable[[Handler], OdooGateway]) -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return _rpc_result(55)

    gateway = make_gateway(handler)
    values = {
        "partner_id": 3,
        "origin": "WC-1",
        "order_line": [[0, 0, {"product_id": 4, "price_unit": Decimal("9.99")}]],
    }

    assert gateway.create_order(values) == 55
    params = bodies[0]["params"]
    assert isinstance(params, dict)
    assert params["model"] == "sale.order"
    assert params["method"] == "create"
    assert params["args"][0]["order_line"][0][2]["price_unit"] == pytest.approx(9.99)


def test_create_accepts_single_id_list(make_gateway: Callable[[Handler], OdooGateway]) -> None:
    gateway = make_gateway(lambda _: _rpc_result([12]))

    assert gateway.create(EntityKind.PRODUCT, {"default_code": "X"}) == 12


def test_error_payload_raises_api_error(make_gateway: Callable[[Handler], OdooGateway]) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "jsonrpc": "2.0",
                "id": 1,
                "error": {
                    "code": 200,
                    "message": "Odoo Server Error",
                    "data": {"name": "odoo.exceptions.ValidationError", "message": "bad email"},
                },
            },
        )

    gateway = make_gateway(handler)

    with pytest.raises(OdooAPIError, match="bad email") as exc:
        gateway.create(EntityKind.CUSTOMER, {"email": "x"})

    assert exc.value.code == 200
    assert isinstance(exc.value, GatewayError)


def test_create_without_id_is_an_error(make_gateway: Callable[[Handler], OdooGateway]) -> None:
    gateway = make_gateway(lambda _: _rpc_result(False))

    with pytest.raises(OdooAPIError, match="no id"):
        gateway.create_order({"origin": "WC-1"})


def test_http_failure_raises_transport_error(
    make_gateway: Callable[[Handler], OdooGateway],
) -> None:
    gateway = make_gateway(lambda _: httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(GatewayTransportError):
        gateway.find(EntityKind.ORDER, KeyFilter("origin", "WC-1"))


def test_invalid_url_raises_transport_error(
    make_gateway: Callable[[Handler], OdooGateway],
) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        raise httpx.InvalidURL("Invalid non-printable ASCII character in URL")

    gateway = make_gateway(handler)

    with pytest.raises(GatewayTransportError, match="non-printable"):
        gateway.find(EntityKind.ORDER, KeyFilter("origin", "WC-1"))


def test_non_json_response_raises_api_error(
    make_gateway: Callable[[Handler], OdooGateway],
) -> None:
    gateway = make_gateway(lambda _: httpx.Response(200, text="<html>login</html>"))

    with pytest.raises(OdooAPIError, match="Unexpected"):
        gateway.find(EntityKind.ORDER, KeyFilter("origin", "WC-1"))


def test_out_of_range_number_raises_api_error_before_sending(
    make_gateway: Callable[[Handler], OdooGateway],
) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _rpc_result(1)

    gateway = make_gateway(handler)

    with pytest.raises(OdooAPIError, match="Cannot encode"):
        gateway.create(EntityKind.PRODUCT, {"default_code": "X", "list_price": Decimal("1e400")})

    assert seen == []


def test_resolver_reports_unencodable_product_as_unresolved(
    make_gateway: Callable[[Handler], OdooGateway],
) -> None:
    gateway = make_gateway(lambda _: _rpc_result([]))

    product_id = RecordResolver(gateway).resolve(
        EntityKind.PRODUCT,
        KeyFilter("default_code", "X"),
        {"default_code": "X", "list_price": Decimal("1e400")},
    )

    assert product_id is None


def test_calls_share_one_client_until_closed(
    odoo_config: OdooConfig, make_client_factory: Factory
) -> None:
    build_client = make_client_factory(lambda _: _rpc_result([]))
    clients: list[ResilientClient] = []

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = build_client(resilience)
        clients.append(client)
        return client

    with OdooGateway(config=odoo_config, client_factory=factory) as gateway:
        gateway.find(EntityKind.ORDER, KeyFilter("origin", "WC-1"))
        gateway.find(EntityKind.ORDER, KeyFilter("origin", "WC-2"))
        assert len(clients) == 1

    assert clients[0]._client.is_closed  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_get_odoo_config_uses_single_attempt_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ODOO_URL", "https://erp.test/")
    monkeypatch.setenv("ODOO_DB", "shop-db")
    monkeypatch.setenv("ODOO_API_KEY", "secret")

    config = get_odoo_config()

    assert config.database == "shop-db"
    assert config.resilience.base_url == "https://erp.test"
    assert config.resilience.retry.total == 0
    assert config.resilience.ratelimit is not None
