"""WooCommerce configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

WOOCOMMERCE_ORDERS_PATH = "/wp-json/wc/v3/orders"
WOOCOMMERCE_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True, slots=True)
class WooCommerceConfig:
    """Holds WooCommerce REST API configuration values."""

    consumer_key: str
    consumer_secret: str
    resilience: ResilienceConfig


def get_woocommerce_config(*, resilience: ResilienceConfig | None = None) -> WooCommerceConfig:
    values = require_env_vars(("WOO_URL", "WOO_CK", "WOO_CS"))
    return WooCommerceConfig(
        consumer_key=values["WOO_CK"],
        consumer_secret=values["WOO_CS"],
        resilience=resilience
        or ResilienceConfig(
            name="woocommerce",
            base_url=values["WOO_URL"].rstrip("/"),
            timeout_seconds=WOOCOMMERCE_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        ),
    )
