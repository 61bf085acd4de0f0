from unittest.mock import AsyncMock

from fastapi.testclient import TestClient


def test_health_check(client: TestClient):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_vector_store(client: TestClient):
    response = client.get("/api/v1/health/vector-store")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "store_type": "memory", "chunk_count": 0}


def test_health_check_vector_store_unavailable(client: TestClient, service_cache):
    service_cache._vector_index.count = AsyncMock(side_effect=ConnectionError("db down"))

    response = client.get("/api/v1/health/vector-store")

    assert response.status_code == 503
    assert response.json()["detail"] == "Vector store unavailable"
