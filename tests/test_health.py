"""Tests for the health check and metrics endpoints."""

from collections.abc import Iterator

import pytest
from azure.cosmos.exceptions import CosmosHttpResponseError
from fastapi.testclient import TestClient

from helium_api.config import Settings, get_settings
from helium_api.main import app
from helium_api.services import HeliumServices, get_services
from helium_common.telemetry.metrics import NullMetricsRecorder


@pytest.fixture
def metrics_disabled_client(services: HeliumServices) -> Iterator[TestClient]:
    """Client whose services record metrics nowhere."""
    quiet = HeliumServices(
        metrics=NullMetricsRecorder(), store=services.store, document_service=services.document_service
    )
    app.dependency_overrides[get_services] = lambda: quiet
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.unit
def test_health_check(client: TestClient) -> None:
    """Test the health check endpoint returns 200."""
    response = client.get("/api/health")
    assert response.status_code == 200


@pytest.mark.unit
def test_health_check_response_schema(client: TestClient) -> None:
    """Test the health check endpoint response has correct schema."""
    response = client.get("/api/health")
    data = response.json()

    assert "status" in data
    assert "version" in data
    assert "message" in data

    assert data["status"] == "ok"
    assert isinstance(data["version"], str)
    assert data["message"] == "API is healthy"
    assert data["counts"] == {"Movie": 2, "Actor": 2, "Genre": 3}


@pytest.mark.unit
def test_health_check_store_failure(client: TestClient, cosmos_client) -> None:
    """Test the health check reports 503 when the store fails."""
    cosmos_client.container.error = CosmosHttpResponseError(status_code=503, message="Service is unavailable")

    response = client.get("/api/health")
    assert response.status_code == 503

    data = response.json()
    assert data["status"] == "error"
    assert "503" in data["message"]
    assert data["counts"] == {}


@pytest.mark.unit
def test_health_check_store_failure_hidden(client: TestClient, cosmos_client) -> None:
    """Test the health check withholds store error text when exposure is disabled."""
    app.dependency_overrides[get_settings] = lambda: Settings(expose_store_errors=False)
    cosmos_client.container.error = CosmosHttpResponseError(status_code=503, message="Service is unavailable")

    response = client.get("/api/health")
    assert response.status_code == 503
    assert response.json()["message"] == "Document store unavailable"


@pytest.mark.unit
def test_health_check_response_json() -> None:
    """Test health check response is valid JSON."""
    from helium_api.models.health import HealthCheckResponse

    response = HealthCheckResponse(
        status="ok",
        version="1.0.0",
        environment="test",
    )

    # Should not raise
    response_dict = response.model_dump()
    assert response_dict["status"] == "ok"
    assert response_dict["counts"] == {}


@pytest.mark.unit
def test_healthz(client: TestClient) -> None:
    """Test /healthz returns the document counts as plain text."""
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Movies: 2\r\nActors: 2\r\nGenres: 3"


@pytest.mark.unit
def test_healthz_store_failure(client: TestClient, cosmos_client) -> None:
    """Test /healthz reports a store failure as a 500 with the error text."""
    cosmos_client.container.error = CosmosHttpResponseError(status_code=429, message="Request rate is large")

    response = client.get("/healthz")
    assert response.status_code == 500
    assert response.text.startswith("Healthz Exception: ")
    assert "Request rate is large" in response.text


@pytest.mark.unit
def test_metrics_exposes_store_samples(client: TestClient) -> None:
    """Test store calls show up on the metrics endpoint."""
    client.get("/api/genres")

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "helium_dependency_calls_total" in response.text
    assert 'operation="CosmosDB.query_documents"' in response.text


@pytest.mark.unit
def test_metrics_disabled(metrics_disabled_client: TestClient) -> None:
    """Test the metrics endpoint is 404 when metrics are disabled."""
    response = metrics_disabled_client.get("/metrics")
    assert response.status_code == 404
    assert metrics_disabled_client.get("/api/genres").status_code == 200
