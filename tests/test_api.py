"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from uilens.api.app import create_app, status_for
from uilens.api.routes import reset_session
from uilens.core.errors import ElementNotFoundError, NoScreenCapturedError, StaleElementIndexError, UILensError

from .conftest import DESKTOP_TEXT, SAMPLE_XML


@pytest.fixture
def client():
    reset_session()
    with TestClient(create_app()) as test_client:
        yield test_client
    reset_session()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_elements(client):
    response = client.post("/api/v1/ui/elements", json={"hierarchy": SAMPLE_XML})
    body = response.json()
    assert body["count"] == 8
    assert body["elements"][1]["center_x"] == 540
    assert '@ (540, 850)' in body["text"]


def test_query(client):
    response = client.post(
        "/api/v1/ui/query",
        json={"hierarchy": SAMPLE_XML, "class_name": "EditText"},
    )
    assert response.json()["count"] == 2


def test_analyze(client):
    response = client.post(
        "/api/v1/ui/analyze",
        json={"hierarchy": SAMPLE_XML, "activity": "com.example.app.LoginActivity"},
    )
    body = response.json()
    assert len(body["analysis"]["inputs"]) == 2
    assert body["text"].startswith("=== Screen Analysis ===")


def test_find_and_not_found(client):
    found = client.post("/api/v1/ui/find", json={"hierarchy": SAMPLE_XML, "description": "login"})
    assert found.status_code == 200
    assert found.json()["confidence"] == 100

    missing = client.post("/api/v1/ui/find", json={"hierarchy": SAMPLE_XML, "description": "checkout"})
    assert missing.status_code == 404
    assert missing.json()["detail"]["code"] == "ELEMENT_NOT_FOUND"


def test_diff_and_suggest(client):
    diff = client.post("/api/v1/ui/diff", json={"before": SAMPLE_XML, "after": DESKTOP_TEXT}).json()
    assert diff["diff"]["screen_changed"] is True

    suggestions = client.post("/api/v1/ui/suggest", json={"hierarchy": SAMPLE_XML}).json()
    assert suggestions["suggestions"][0] == "input_text into Username"


def test_session_flow(client):
    assert client.get("/api/v1/session/elements/0").status_code == 404

    first = client.post("/api/v1/session/capture", json={"hierarchy": SAMPLE_XML}).json()
    assert first["generation"] == 1
    assert first["count"] == 8

    element = client.get("/api/v1/session/elements/1", params={"generation": 1})
    assert element.json()["text"] == "Login"

    client.post("/api/v1/session/capture", json={"hierarchy": DESKTOP_TEXT, "platform": "desktop"})
    stale = client.get("/api/v1/session/elements/1", params={"generation": 1})
    assert stale.status_code == 409
    assert stale.json()["detail"]["code"] == "STALE_INDEX"

    found = client.post("/api/v1/session/find", json={"description": "save"})
    assert found.json()["element"]["resource_id"] == "save_btn"

    hints = client.get("/api/v1/session/hints").json()["hints"]
    assert hints.startswith("Screen changed")

    summary = client.get("/api/v1/session/summary").json()
    assert summary["generation"] == 2
    assert summary["platform"] == "desktop"


def test_errors_before_capture(client):
    hints = client.get("/api/v1/session/hints")
    assert hints.status_code == 404
    assert hints.json()["detail"]["code"] == "NO_SCREEN_CAPTURED"

    missing = client.post("/api/v1/session/find", json={"description": "login"})
    assert missing.status_code == 404


def test_out_of_range_index(client):
    client.post("/api/v1/session/capture", json={"hierarchy": SAMPLE_XML})
    response = client.get("/api/v1/session/elements/42")
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "ELEMENT_NOT_FOUND"


def test_health_reports_generation(client):
    assert client.get("/health").json()["generation"] == 0
    client.post("/api/v1/session/capture", json={"hierarchy": SAMPLE_XML})
    assert client.get("/health").json()["generation"] == 1


def test_index_lists_endpoints(client):
    endpoints = client.get("/").json()["endpoints"]
    assert "/api/v1/ui/find" in endpoints
    assert "/api/v1/session/elements/{index}" in endpoints


def test_status_mapping():
    assert status_for(StaleElementIndexError(1, 1, 2)) == 409
    assert status_for(ElementNotFoundError("x")) == 404
    assert status_for(NoScreenCapturedError()) == 404
    assert status_for(UILensError("boom")) == 400
