"""Tests for the health check endpoint."""

from fastapi.testclient import TestClient

from comicproxy.main import app

client = TestClient(app)


def test_health_endpoint():
    """Test that the health endpoint returns correct response."""
    response = client.get("/health")

    assert response.status_code == 200

    data = response.json()

    assert "status" in data
    assert "service" in data
    assert "version" in data
    assert data["status"] == "ok"


def test_health_endpoint_values():
    """Test that the health endpoint returns expected values."""
    response = client.get("/health")

    assert response.status_code == 200

    data = response.json()

    assert data["service"] == "comicproxy"
    assert data["version"] == "0.1.0"


def test_package_exports_client():
    import comicproxy
    from comicproxy.client import UploadClient

    assert comicproxy.UploadClient is UploadClient


def test_main_module_serves_with_uvicorn(monkeypatch):
    """Test that running the module starts uvicorn on PORT."""
    import runpy
    from unittest.mock import patch

    monkeypatch.setenv("PORT", "9001")
    with patch("uvicorn.run") as mock_run:
        runpy.run_module("comicproxy.main", run_name="__main__")

    mock_run.assert_called_once()
    assert mock_run.call_args.kwargs == {"host": "0.0.0.0", "port": 9001}
