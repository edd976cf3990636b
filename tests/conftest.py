from __future__ import annotations

import os

import pytest

from tests.helpers.orders import FakeErpGateway

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")


@pytest.fixture
def gateway() -> FakeErpGateway:
    return FakeErpGateway()
