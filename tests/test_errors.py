from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.settings import settings
from app.main import app

DB_DOWN = OperationalError("SELECT 1", {}, Exception("connection refused by db-host"))


@pytest.fixture
def unsafe_client():
    return TestClient(app, raise_server_exceptions=False)


def test_database_error_is_500_without_details(unsafe_client, mentee_headers, monkeypatch):
    monkeypatch.setattr(settings, "environment", "production")
    with patch("app.services.resources.find_all", side_effect=DB_DOWN):
        resp = unsafe_client.get("/resources", headers={**mentee_headers, "X-Correlation-ID": "err-1"})
    assert resp.status_code == 500
    assert resp.json() == {"status": 500, "message": "Internal server error", "correlation_id": "err-1"}
    assert "db-host" not in resp.text
    assert resp.headers["X-Correlation-ID"] == "err-1"


def test_database_error_details_in_development(unsafe_client, mentee_headers, monkeypatch):
    monkeypatch.setattr(settings, "environment", "development")
    with patch("app.services.resources.find_all", side_effect=DB_DOWN):
        resp = unsafe_client.get("/resources", headers=mentee_headers)
    assert resp.status_code == 500
    body = resp.json()
    assert body["status"] == 500
    assert body["message"] == "Internal server error"
    assert body["type"] == "OperationalError"
    assert "db-host" in body["error"]
    assert body["correlation_id"] == resp.headers["X-Correlation-ID"]
