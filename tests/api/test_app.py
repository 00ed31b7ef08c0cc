"""Tests for the application root endpoints."""


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_lists_endpoints(client):
    body = client.get("/").json()
    assert body["message"] == "YouTubeFit API"
    assert body["endpoints"]["recommendation"] == "/recommendation/today"
