from __future__ import annotations

from pathlib import Path

import pytest

from ordersync.config import (
    ConfigurationError,
    MissingConfigurationError,
    SyncConfig,
    get_database_config,
    get_storage_config,
    get_sync_config,
    require_env_vars,
)

_SYNC_VARS = (
    "SYNC_PAGE_SIZE",
    "SYNC_ORIGIN_PREFIX",
    "SYNC_HOME_COUNTRY_ID",
    "SYNC_PLACEHOLDER_EMAIL_DOMAIN",
    "SYNC_PLATFORM_LABEL",
    "SYNC_PRODUCT_TYPE",
    "SYNC_LOCK_TTL_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_sync_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SYNC_VARS:
        monkeypatch.delenv(name, raising=False)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " value ")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert str(exc.value) == "Missing configuration for: MISSING_A, MISSING_B"


def test_sync_config_defaults() -> None:
    assert get_sync_config() == SyncConfig()
    assert SyncConfig().page_size == 20
    assert SyncConfig().origin_prefix == "WC-"


def test_sync_config_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYNC_PAGE_SIZE", "50")
    monkeypatch.setenv("SYNC_HOME_COUNTRY_ID", "75")
    monkeypatch.setenv("SYNC_PLACEHOLDER_EMAIL_DOMAIN", "shop.invalid")
    monkeypatch.setenv("SYNC_ORIGIN_PREFIX", "SHOP-")

    config = get_sync_config()

    assert config.page_size == 50
    assert config.home_country_id == 75
    assert config.placeholder_email_domain == "shop.invalid"
    assert config.origin_prefix == "SHOP-"


@pytest.mark.parametrize("raw", ["twenty", "0", "-3"])
def test_sync_config_rejects_bad_page_size(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("SYNC_PAGE_SIZE", raw)

    with pytest.raises(ConfigurationError, match="SYNC_PAGE_SIZE"):
        get_sync_config()


def test_database_uri_defaults_to_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("ORDERSYNC_DATA_DIR", str(tmp_path / "data"))

    storage = get_storage_config()
    config = get_database_config(storage=storage)

    assert config.uri == f"sqlite+pysqlite:///{(tmp_path / 'data').resolve()}/ordersync.db"
    assert (tmp_path / "data").is_dir()


def test_database_uri_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"
