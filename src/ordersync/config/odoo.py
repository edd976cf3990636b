"""Odoo configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import SINGLE_ATTEMPT, RateLimit, ResilienceConfig

ODOO_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class OdooConfig:
    """Holds Odoo JSON-RPC configuration values."""

    database: str
    api_key: str
    resilience: ResilienceConfig


def get_odoo_config(*, resilience: ResilienceConfig | None = None) -> OdooConfig:
    values = require_env_vars(("ODOO_URL", "ODOO_DB", "ODOO_API_KEY"))
    return OdooConfig(
        database=values["ODOO_DB"],
        api_key=values["ODOO_API_KEY"],
        resilience=resilience
        or ResilienceConfig(
            name="odoo",
            base_url=values["ODOO_URL"].rstrip("/"),
            timeout_seconds=ODOO_TIMEOUT_SECONDS,
            retry=SINGLE_ATTEMPT,
            # Shared by every call made through one OdooGateway.
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        ),
    )
