from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from ordersync.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from ordersync.config.http_resilience import ResilienceConfig

    Handler = Callable[[httpx.Request], httpx.Response]
    ClientFactory = Callable[[ResilienceConfig], ResilientClient]


@pytest.fixture
def make_client_factory() -> Callable[[Handler], ClientFactory]:
    def build(handler: Handler) -> ClientFactory:
        async def async_handler(request: httpx.Request) -> httpx.Response:
            return handler(request)

        def factory(resilience: ResilienceConfig) -> ResilientClient:
            client = ResilientClient(resilience)
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                base_url=resilience.base_url or "",
                transport=httpx.MockTransport(async_handler),
            )
            return client

        return factory

    return build
