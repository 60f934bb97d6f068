"""Tests for FastAPI app entry point."""
from unittest.mock import MagicMock

from fastapi.testclient import TestClient


def _clear_state(app) -> None:
    for name in ("translation_service", "consultation_service", "datastore"):
        if hasattr(app.state, name):
            delattr(app.state, name)


def test_health_endpoint_returns_status_ok() -> None:
    """Health check response should contain status=ok."""
    from catvoice.main import app

    response = TestClient(app).get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "version" in data


def test_health_reports_unavailable_without_services() -> None:
    from catvoice.main import app

    _clear_state(app)
    data = TestClient(app).get("/health").json()

    assert data["services"] == {"model": "unavailable", "datastore": "unavailable"}


def test_health_reports_ok_with_services() -> None:
    from catvoice.main import app

    app.state.translation_service = MagicMock()
    app.state.datastore = MagicMock()
    try:
        data = TestClient(app).get("/health").json()
    finally:
        _clear_state(app)

    assert data["services"] == {"model": "ok", "datastore": "ok"}


def test_app_has_correct_title() -> None:
    """FastAPI app should have the project title."""
    from catvoice.main import app
    assert app.title == "CatVoice - Cat Feeling Translator"


def test_app_has_cors_middleware() -> None:
    """App should allow requests from frontend origin."""
    from catvoice.main import app
    from starlette.middleware.cors import CORSMiddleware

    middleware_classes = [m.cls for m in app.user_middleware]
    assert CORSMiddleware in middleware_classes


def test_routes_registered() -> None:
    from catvoice.main import app

    paths = set(app.openapi()["paths"])
    assert "/api/translate" in paths
    assert "/api/consult" in paths
    assert "/api/consult/video-count" in paths
