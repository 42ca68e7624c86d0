"""Pytest configuration and fixtures."""

import re
from collections.abc import AsyncIterator, Iterator
from typing import Any

import pytest
from azure.core.exceptions import ServiceRequestError
from azure.cosmos.exceptions import CosmosResourceNotFoundError
from fastapi.testclient import TestClient

from helium_api.main import app
from helium_api.services import HeliumServices, get_services
from helium_common.infra.cosmos.document_store import REQUEST_CHARGE_HEADER, CosmosDocumentStore
from helium_common.services.document_service import DocumentService
from helium_common.services.partition_key import get_partition_key
from helium_common.telemetry.metrics import DependencyCall, MetricsRecorder, PrometheusMetricsRecorder

COSMOS_ENDPOINT = "https://helium-test.documents.azure.com:443/"
REQUEST_CHARGE = 2.5


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests with no external services")
    config.addinivalue_line("markers", "integration: marks tests as integration tests that need a Cosmos DB account")


def _document(**fields: Any) -> dict[str, Any]:
    """Build a stored document whose partition key was derived at write time."""
    fields.setdefault("partitionKey", get_partition_key(fields["id"]))
    return fields


def sample_documents() -> list[dict[str, Any]]:
    """A small heterogeneous collection of actors, movies and genres."""
    return [
        _document(
            id="nm0000173",
            actorId="nm0000173",
            type="Actor",
            name="Nicole Kidman",
            birthYear=1967,
            profession=["actress", "producer", "soundtrack"],
            textSearch="nicole kidman eyes wide shut",
            movies=[{"movieId": "tt0120663", "title": "Eyes Wide Shut"}],
        ),
        _document(
            id="nm0000206",
            actorId="nm0000206",
            type="Actor",
            name="Keanu Reeves",
            birthYear=1964,
            profession=["actor", "producer", "soundtrack"],
            textSearch="keanu reeves the matrix",
            movies=[{"movieId": "tt0133093", "title": "The Matrix"}],
        ),
        _document(
            id="tt0133093",
            movieId="tt0133093",
            type="Movie",
            textSearch="the matrix",
            title="The Matrix",
            year=1999,
            runtime=136,
            rating=8.7,
            votes=1639150,
            totalScore=10.4,
            genres=["Action", "Sci-Fi"],
            roles=[{"actorId": "nm0000206", "name": "Keanu Reeves", "character": "Neo"}],
        ),
        _document(
            id="tt0120737",
            movieId="tt0120737",
            type="Movie",
            textSearch="the lord of the rings: the fellowship of the ring",
            title="The Lord of the Rings: The Fellowship of the Ring",
            year=2001,
            runtime=178,
            rating=8.8,
            votes=1608747,
            totalScore=10.5,
            genres=["Adventure", "Drama"],
            roles=[],
        ),
        _document(id="Action", type="Genre"),
        _document(id="Drama", type="Genre"),
        _document(id="Sci-Fi", type="Genre"),
    ]


_TYPE_LITERAL = re.compile(r"root\.type = '(\w+)'")


def evaluate_query(query: str, parameters: list[dict[str, Any]], documents: list[dict[str, Any]]) -> list[Any]:
    """Evaluate the query shapes the query builder produces over in-memory documents."""
    params = {p["name"]: p["value"] for p in parameters}
    match = _TYPE_LITERAL.search(query)
    doc_type = match.group(1) if match else params.get("@type")

    rows = [doc for doc in documents if doc.get("type") == doc_type]
    if "CONTAINS(root.textSearch, @filter)" in query:
        rows = [doc for doc in rows if "textSearch" in doc and params["@filter"] in doc["textSearch"]]

    if "COUNT(1)" in query:
        return [len(rows)]
    if query.startswith("SELECT VALUE root.id"):
        return [doc["id"] for doc in rows]
    return [dict(doc) for doc in rows]


class FakeContainer:
    """Stands in for azure.cosmos.aio.ContainerProxy."""

    def __init__(self, documents: list[dict[str, Any]], request_charge: float | None = REQUEST_CHARGE) -> None:
        self.documents = documents
        self.request_charge = request_charge
        self.error: Exception | None = None
        self.read_failures = 0
        self.read_calls = 0
        self.queries: list[dict[str, Any]] = []
        self.reads: list[tuple[str, str]] = []

    def headers(self) -> dict[str, str]:
        if self.request_charge is None:
            return {}
        return {REQUEST_CHARGE_HEADER: str(self.request_charge)}

    async def read(self) -> dict[str, Any]:
        self.read_calls += 1
        if self.read_failures > 0:
            self.read_failures -= 1
            raise ServiceRequestError("Connection refused")
        return {"id": "movies"}

    def query_items(self, query: str, parameters=None, response_hook=None, **kwargs) -> AsyncIterator[Any]:
        self.queries.append({"query": query, "parameters": parameters or [], **kwargs})
        return self._run_query(query, parameters or [], response_hook)

    async def _run_query(self, query, parameters, response_hook) -> AsyncIterator[Any]:
        if self.error is not None:
            raise self.error
        rows = evaluate_query(query, parameters, self.documents)
        if response_hook is not None:
            response_hook(self.headers(), rows)
        for row in rows:
            yield row

    async def read_item(self, item: str, partition_key: str, response_hook=None, **kwargs) -> dict[str, Any]:
        self.reads.append((item, partition_key))
        if self.error is not None:
            raise self.error
        for doc in self.documents:
            if doc["id"] == item and doc.get("partitionKey") == partition_key:
                result = {**doc, "_rid": "Ai4xAKnDOv8BAAAAAAAAAA==", "_etag": '"00000000-0000"', "_ts": 1570000000}
                if response_hook is not None:
                    response_hook(self.headers(), result)
                return result

        error = CosmosResourceNotFoundError(
            status_code=404, message="Entity with the specified id does not exist in the system."
        )
        error.headers = self.headers()
        raise error


class FakeDatabase:
    def __init__(self, container: FakeContainer) -> None:
        self.container = container
        self.container_names: list[str] = []

    def get_container_client(self, container: str) -> FakeContainer:
        self.container_names.append(container)
        return self.container


class FakeCosmosClient:
    """Stands in for azure.cosmos.aio.CosmosClient."""

    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self.container = FakeContainer(documents)
        self.database = FakeDatabase(self.container)
        self.database_names: list[str] = []
        self.closed = False

    def get_database_client(self, database: str) -> FakeDatabase:
        self.database_names.append(database)
        return self.database

    async def close(self) -> None:
        self.closed = True


class RecordingMetricsRecorder(MetricsRecorder):
    """Keeps every sample so tests can count them."""

    def __init__(self) -> None:
        self.durations: list[tuple[str, float]] = []
        self.costs: list[tuple[str, float]] = []
        self.result_counts: list[tuple[str, int]] = []
        self.dependencies: list[DependencyCall] = []

    def track_duration(self, name: str, seconds: float) -> None:
        self.durations.append((name, seconds))

    def track_cost(self, name: str, request_units: float) -> None:
        self.costs.append((name, request_units))

    def track_result_count(self, name: str, count: int) -> None:
        self.result_counts.append((name, count))

    def track_dependency(self, call: DependencyCall) -> None:
        self.dependencies.append(call)


@pytest.fixture
def documents() -> list[dict[str, Any]]:
    return sample_documents()


@pytest.fixture
def cosmos_client(documents) -> FakeCosmosClient:
    return FakeCosmosClient(documents)


@pytest.fixture
def metrics() -> RecordingMetricsRecorder:
    return RecordingMetricsRecorder()


@pytest.fixture
def store(cosmos_client, metrics) -> CosmosDocumentStore:
    return CosmosDocumentStore(
        cosmos_endpoint=COSMOS_ENDPOINT,
        database_name="imdb",
        container_name="movies",
        metrics=metrics,
        client=cosmos_client,
    )


@pytest.fixture
def document_service(store) -> DocumentService:
    return DocumentService(store)


@pytest.fixture
def services(cosmos_client) -> HeliumServices:
    """Service container wired to the fake Cosmos client and a Prometheus recorder."""
    recorder = PrometheusMetricsRecorder()
    store = CosmosDocumentStore(
        cosmos_endpoint=COSMOS_ENDPOINT,
        database_name="imdb",
        container_name="movies",
        metrics=recorder,
        client=cosmos_client,
    )
    return HeliumServices(metrics=recorder, store=store, document_service=DocumentService(store))


@pytest.fixture
def client(services) -> Iterator[TestClient]:
    """Create a FastAPI test client backed by the fake store."""
    app.dependency_overrides[get_services] = lambda: services
    yield TestClient(app)
    app.dependency_overrides.clear()
