"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_int, optional_env_str, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import SINGLE_ATTEMPT, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .odoo import OdooConfig, get_odoo_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import SyncConfig, get_sync_config
from .woocommerce import WOOCOMMERCE_ORDERS_PATH, WooCommerceConfig, get_woocommerce_config

__all__ = [
    "SINGLE_ATTEMPT",
    "WOOCOMMERCE_ORDERS_PATH",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "OdooConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "WooCommerceConfig",
    "configure_logging",
    "get_database_config",
    "get_odoo_config",
    "get_storage_config",
    "get_sync_config",
    "get_woocommerce_config",
    "optional_env_int",
    "optional_env_str",
    "require_env_vars",
]
