"""
Health, readiness and root endpoint tests.
"""
from unittest.mock import patch

from discovery.core.config import settings


def test_root_endpoint(client):
    """Test that the root endpoint returns 200 and correct message."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == settings.PROJECT_NAME
    assert data["version"] == "1.0.0"
    assert data["catalog_url"] == "/catalog"


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_when_search_reachable(client):
    with patch("discovery.api.v1.endpoints.health.ping", return_value=True):
        response = client.get("/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["checks"]["elasticsearch"]["status"] == "ok"
    assert data["request_id"]


def test_ready_when_search_unreachable(client):
    with patch("discovery.api.v1.endpoints.health.ping", return_value=False):
        data = client.get("/ready").json()

    assert data["status"] == "down"
    assert data["checks"]["elasticsearch"]["message"] == "Elasticsearch unreachable"


def test_ready_when_search_disabled(client):
    with patch.object(settings, "ELASTICSEARCH_ENABLED", False):
        data = client.get("/ready").json()

    assert data["status"] == "down"
    assert data["checks"]["elasticsearch"]["message"] == "Not enabled"
