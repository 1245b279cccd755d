import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from worldclock.config.settings import get_settings
from worldclock.data import models
from worldclock.web.api import deps
from worldclock.web.main import app


@pytest.fixture
def client(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'clocks.db'}"

    async def _create_schema() -> None:
        engine = create_async_engine(url)
        async with engine.begin() as conn:
            await conn.run_sync(models.Base.metadata.create_all)
        await engine.dispose()

    asyncio.run(_create_schema())

    async def _get_db():
        engine = create_async_engine(url)
        session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
        try:
            async with session_factory() as session:
                yield session
        finally:
            await engine.dispose()

    monkeypatch.setenv("DEVICE_TIMEZONE", "America/New_York")
    app.dependency_overrides[deps.get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_reports_device_zone(client):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["device_timezone"] == "America/New_York"
    assert payload["catalog_size"] > 300


def test_meta_options(client):
    payload = client.get("/api/meta/options").json()
    assert payload["refresh_interval_seconds"] == 60
    assert payload["minus_sign"] == "−"


def test_search_zones_by_country(client):
    response = client.get("/api/zones", params={"q": "japan"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["count"] >= 1
    assert {"id": "Asia/Tokyo", "city": "Tokyo", "country": "Japan"} in payload["zones"]


def test_search_zones_respects_limit(client):
    payload = client.get("/api/zones", params={"limit": 5}).json()
    assert payload["count"] == 5
    assert payload["total"] > 5


def test_zone_detail(client):
    response = client.get("/api/zones/Asia/Tokyo", params={"at": "2024-01-15T12:00:00Z"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["offset_minutes"] == 540
    assert payload["offset_label"] == "+14h"
    assert payload["time"] == "21:00"
    assert payload["day"] == "Today"


def test_zone_detail_unknown_zone(client):
    response = client.get("/api/zones/Mars/Olympus_Mons")
    assert response.status_code == 404


def test_clock_board_seeds_device_zone(client):
    response = client.get("/api/clocks", params={"at": "2024-01-15T12:00:00Z"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["device_timezone"] == "America/New_York"
    assert payload["clocks"] == [
        {
            "zone_id": "America/New_York",
            "city": "New York",
            "time": "07:00",
            "offset_label": "+0h",
            "day": "Today",
            "error": None,
        }
    ]


def test_add_and_remove_clock(client):
    added = client.post("/api/clocks", json={"zone": "Asia/Tokyo"})
    assert added.status_code == 201
    assert [clock["zone_id"] for clock in added.json()["clocks"]] == ["America/New_York", "Asia/Tokyo"]

    duplicate = client.post("/api/clocks", json={"zone": "Asia/Tokyo"})
    assert duplicate.status_code == 200
    assert len(duplicate.json()["clocks"]) == 2

    removed = client.delete("/api/clocks/Asia/Tokyo")
    assert removed.status_code == 200
    assert [clock["zone_id"] for clock in removed.json()["clocks"]] == ["America/New_York"]

    missing = client.delete("/api/clocks/Asia/Tokyo")
    assert missing.status_code == 404


def test_add_unknown_zone_is_rejected(client):
    response = client.post("/api/clocks", json={"zone": "Nowhere/Land"})
    assert response.status_code == 422


def test_zone_detail_directory_id_is_not_found(client):
    assert client.get("/api/zones/America").status_code == 404


def test_add_directory_id_is_rejected(client):
    response = client.post("/api/clocks", json={"zone": "Europe"})
    assert response.status_code == 422


def test_clock_board_rejects_instant_outside_supported_range(client):
    response = client.get("/api/clocks", params={"at": "9999-12-31T23:00:00Z"})
    assert response.status_code == 422
    assert client.get("/api/zones/Asia/Tokyo", params={"at": "9999-12-31T23:00:00Z"}).status_code == 422


def test_configured_minus_sign_reaches_clock_labels(client, monkeypatch):
    monkeypatch.setenv("MINUS_SIGN", "-")
    get_settings.cache_clear()
    try:
        client.post("/api/clocks", json={"zone": "America/Los_Angeles"})
        payload = client.get("/api/clocks", params={"at": "2024-01-15T12:00:00Z"}).json()
    finally:
        get_settings.cache_clear()

    labels = {clock["zone_id"]: clock["offset_label"] for clock in payload["clocks"]}
    assert labels["America/Los_Angeles"] == "-3h"
    assert labels["America/New_York"] == "+0h"
