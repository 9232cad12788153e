def test_app_starts(client):
    response = client.get("/health")
    assert response.status_code == 200


def test_health_endpoint(client):
    response = client.get("/health")
    data = response.json()
    assert response.status_code == 200
    assert data["status"] == "healthy"
    assert "timestamp" in data


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"x-request-id": "req-123"})
    assert response.headers["x-request-id"] == "req-123"


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json()["code"] == 404
