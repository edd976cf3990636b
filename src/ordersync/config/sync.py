"""Reconciliation defaults for the order sync job."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_int, optional_env_str

DEFAULT_PAGE_SIZE = 20
DEFAULT_ORIGIN_PREFIX = "WC-"
DEFAULT_HOME_COUNTRY_ID = 195
DEFAULT_PLACEHOLDER_EMAIL_DOMAIN = "example.com"
DEFAULT_PLATFORM_LABEL = "Woo"
DEFAULT_PRODUCT_TYPE = "consu"
DEFAULT_LOCK_TTL_SECONDS = 900


@dataclass(frozen=True, slots=True)
class SyncConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    origin_prefix: str = DEFAULT_ORIGIN_PREFIX
    home_country_id: int = DEFAULT_HOME_COUNTRY_ID
    placeholder_email_domain: str = DEFAULT_PLACEHOLDER_EMAIL_DOMAIN
    platform_label: str = DEFAULT_PLATFORM_LABEL
    product_type: str = DEFAULT_PRODUCT_TYPE
    lock_ttl_seconds: int = DEFAULT_LOCK_TTL_SECONDS


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        page_size=optional_env_int("SYNC_PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1),
        origin_prefix=optional_env_str("SYNC_ORIGIN_PREFIX", DEFAULT_ORIGIN_PREFIX),
        home_country_id=optional_env_int(
            "SYNC_HOME_COUNTRY_ID", DEFAULT_HOME_COUNTRY_ID, minimum=1
        ),
        placeholder_email_domain=optional_env_str(
            "SYNC_PLACEHOLDER_EMAIL_DOMAIN", DEFAULT_PLACEHOLDER_EMAIL_DOMAIN
        ),
        platform_label=optional_env_str("SYNC_PLATFORM_LABEL", DEFAULT_PLATFORM_LABEL),
        product_type=optional_env_str("SYNC_PRODUCT_TYPE", DEFAULT_PRODUCT_TYPE),
        lock_ttl_seconds=optional_env_int(
            "SYNC_LOCK_TTL_SECONDS", DEFAULT_LOCK_TTL_SECONDS, minimum=1
        ),
    )
