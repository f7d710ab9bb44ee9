"""Sanity tests for the FastAPI health endpoint."""

from fastapi.testclient import TestClient

from wallpaper.api.main import create_app
from wallpaper.config.settings import Settings


def test_health_returns_ok(settings: Settings) -> None:
    client = TestClient(create_app(settings))
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_metrics_exposes_upload_counters(settings: Settings) -> None:
    client = TestClient(create_app(settings))
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "wallpaper_uploads_total" in response.text
