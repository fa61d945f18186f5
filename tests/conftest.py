from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from dashgen.config import Settings
from dashgen.main import app, get_dashboard_store, get_settings, get_store
from dashgen.schemas import ColumnSchema
from dashgen.storage.memory import InMemoryDashboardStore, InMemoryDatasetStore

TEST_PALETTE = ["red", "green", "blue"]

SALES_CSV = (
    "Region,Product,Sales,Units,Date\n"
    "East,Widget,100,1,2023-01-01\n"
    "West,Gadget,50,2,2023-01-02\n"
    "East,Gadget,30,3,2023-01-01\n"
).encode("utf-8")


@pytest.fixture
def region_rows():
    return [
        {"Region": "East", "Sales": 100},
        {"Region": "West", "Sales": 50},
        {"Region": "East", "Sales": 30},
    ]


@pytest.fixture
def make_column():
    def _make(name: str, column_type: str) -> ColumnSchema:
        return ColumnSchema(name=name, type=column_type)

    return _make


@pytest.fixture
def test_settings():
    config = Settings()
    config.CHART_PALETTE = list(TEST_PALETTE)
    config.MAX_FILE_SIZE = 1024 * 1024
    return config


@pytest.fixture
def client(test_settings):
    datasets = InMemoryDatasetStore()
    dashboards = InMemoryDashboardStore()
    app.dependency_overrides[get_store] = lambda: datasets
    app.dependency_overrides[get_dashboard_store] = lambda: dashboards
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def uploaded(client):
    response = client.post("/upload", files={"file": ("sales.csv", SALES_CSV, "text/csv")})
    assert response.status_code == 200
    return response.json()
