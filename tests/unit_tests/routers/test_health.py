from fastapi import status
from fastapi.testclient import TestClient


def test_health_ok(client: TestClient):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"] == {"app": True, "disk": True, "dynamodb": True}
    assert data["timestamp"]


def test_health_unavailable_without_table(client_without_table: TestClient):
    response = client_without_table.get("/health")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["checks"]["dynamodb"] is False
