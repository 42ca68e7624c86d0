"""Async Cosmos DB document store."""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from azure.core.exceptions import AzureError, ServiceRequestError, ServiceResponseError
from azure.cosmos.aio import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError
from azure.identity.aio import DefaultAzureCredential

from helium_common.config.store_config import StoreConfig
from helium_common.exceptions import (
    DocumentNotFoundError,
    FatalStoreError,
    StoreConfigurationError,
    StoreError,
    TransientStoreError,
)
from helium_common.models.query import QueryOptions, QuerySpec
from helium_common.telemetry.metrics import DependencyCall, MetricsRecorder

logger = logging.getLogger(__name__)

DEPENDENCY_NAME = "CosmosDB"
QUERY_OPERATION = "query_documents"
READ_OPERATION = "get_document"

REQUEST_CHARGE_HEADER = "x-ms-request-charge"

# Request timeout, gone, throttled, retry-with, service unavailable
TRANSIENT_STATUS_CODES = frozenset({408, 410, 429, 449, 503})

COSMOS_SYSTEM_FIELDS = {"_rid", "_self", "_etag", "_attachments", "_ts"}


class DocumentStore(ABC):
    """Abstract interface for the read-only document store."""

    @abstractmethod
    async def query_documents(self, query: QuerySpec, options: QueryOptions | None = None) -> list[Any]:
        """Run a parameterized query and return every result row."""

    @abstractmethod
    async def get_document(self, partition_key: str, document_id: str) -> dict[str, Any]:
        """Read a single document by partition key and id.

        Raises:
            DocumentNotFoundError: No document exists for the pair
            StoreError: Any other failure
        """

    async def close(self) -> None:
        """Release client resources."""


class RequestCharge:
    """Sums the request charge header over every response page of one call.

    Passed to the SDK as ``response_hook``; the SDK calls ``clear`` before a
    query starts and the instance once per page.
    """

    def __init__(self) -> None:
        self.total: float | None = None

    def clear(self) -> None:
        self.total = None

    def __call__(self, headers: Mapping[str, Any] | None, _result: Any = None) -> None:
        self.add(headers)

    def add(self, headers: Mapping[str, Any] | None) -> None:
        if not headers:
            return
        raw = headers.get(REQUEST_CHARGE_HEADER)
        if raw is None:
            return
        try:
            value = float(raw)
        except (TypeError, ValueError):
            logger.debug("Ignoring unparseable request charge %r", raw)
            return
        self.total = (self.total or 0.0) + value


def classify_store_error(error: BaseException, operation: str) -> StoreError:
    """Map an SDK or transport failure onto the store error taxonomy.

    Args:
        error: Exception raised by the Cosmos SDK
        operation: Store operation that failed

    Returns:
        TransientStoreError for throttling, timeouts and connectivity failures,
        FatalStoreError for everything else
    """
    if isinstance(error, CosmosHttpResponseError):
        message = getattr(error, "http_error_message", None) or str(error)
        if error.status_code in TRANSIENT_STATUS_CODES:
            return TransientStoreError(message, status_code=error.status_code, operation=operation)
        return FatalStoreError(message, status_code=error.status_code, operation=operation)

    if isinstance(error, (ServiceRequestError, ServiceResponseError, TimeoutError)):
        return TransientStoreError(str(error) or type(error).__name__, operation=operation)

    return FatalStoreError(str(error) or type(error).__name__, operation=operation)


class CosmosDocumentStore(DocumentStore):
    """Cosmos DB implementation of DocumentStore using the async SDK."""

    def __init__(
        self,
        cosmos_endpoint: str,
        database_name: str,
        container_name: str,
        metrics: MetricsRecorder,
        cosmos_key: str | None = None,
        client: CosmosClient | None = None,
    ) -> None:
        """Initialize the Cosmos DB document store.

        No network call happens here; the container handle is resolved on
        first use.

        Args:
            cosmos_endpoint: Cosmos DB endpoint URL
            database_name: Database name
            container_name: Container (collection) name
            metrics: Recorder receiving one sample set per store call
            cosmos_key: Cosmos DB key. If None, managed identity is used.
            client: Pre-built async client, mainly for tests
        """
        self.endpoint = cosmos_endpoint
        self.database_name = database_name
        self.container_name = container_name
        self.metrics = metrics
        self._credential: DefaultAzureCredential | None = None

        if client is None:
            if cosmos_key:
                client = CosmosClient(cosmos_endpoint, credential=cosmos_key)
            else:
                self._credential = DefaultAzureCredential()
                client = CosmosClient(cosmos_endpoint, credential=self._credential)

        self.client = client
        self._container: ContainerProxy | None = None

    @classmethod
    def from_config(cls, config: StoreConfig, metrics: MetricsRecorder) -> "CosmosDocumentStore":
        """Build a store from configuration.

        Args:
            config: Store configuration
            metrics: Metrics recorder

        Returns:
            CosmosDocumentStore instance
        """
        if not config.azure_cosmosdb_endpoint:
            raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")

        return cls(
            cosmos_endpoint=config.azure_cosmosdb_endpoint,
            database_name=config.cosmos_database,
            container_name=config.cosmos_collection,
            metrics=metrics,
            cosmos_key=config.azure_cosmosdb_key,
        )

    async def _get_container(self) -> ContainerProxy:
        """Resolve the container handle once and memoize it.

        A failed resolution is not memoized, so the next call tries again.
        Concurrent first calls may both resolve; the last one wins.
        """
        if self._container is not None:
            return self._container

        logger.info("Initializing Cosmos DB container %s/%s", self.database_name, self.container_name)
        try:
            database = self.client.get_database_client(self.database_name)
            container = database.get_container_client(self.container_name)
            await container.read()
        except (AzureError, TimeoutError) as e:
            logger.warning(
                "Cosmos DB container %s/%s could not be resolved: %s",
                self.database_name,
                self.container_name,
                e,
            )
            raise StoreConfigurationError(
                f"Container {self.database_name}/{self.container_name} could not be resolved: {e}",
                status_code=getattr(e, "status_code", None),
                operation="initialize",
            ) from e

        self._container = container
        return container

    async def query_documents(self, query: QuerySpec, options: QueryOptions | None = None) -> list[Any]:
        """Run a query against the container.

        Args:
            query: Query template and parameters
            options: Fan-out options. Defaults to a cross-partition query.

        Returns:
            Result rows in store order

        Raises:
            StoreError: The store reported a failure
        """
        options = options or QueryOptions()
        kwargs: dict[str, Any] = {}
        if not options.enable_cross_partition_query:
            if options.partition_key is None:
                raise ValueError("partition_key is required when cross-partition query is disabled")
            kwargs["partition_key"] = options.partition_key

        charge = RequestCharge()
        started = time.perf_counter()
        result_code: int | None = None
        rows: list[Any] | None = None
        try:
            container = await self._get_container()
            pages = container.query_items(
                query=query.query,
                parameters=query.sdk_parameters(),
                response_hook=charge,
                **kwargs,
            )
            rows = [row async for row in pages]
            result_code = 200
            return rows
        except CosmosHttpResponseError as e:
            result_code = e.status_code
            charge.add(e.headers)
            logger.error("Cosmos DB query failed (%s): %s", e.status_code, query.query)
            raise classify_store_error(e, QUERY_OPERATION) from e
        except (AzureError, TimeoutError) as e:
            logger.error("Cosmos DB query failed: %s", e)
            raise classify_store_error(e, QUERY_OPERATION) from e
        finally:
            self._record(
                QUERY_OPERATION,
                started,
                charge,
                result_code=result_code,
                success=rows is not None,
                data=query.query,
                row_count=len(rows) if rows is not None else None,
            )

    async def get_document(self, partition_key: str, document_id: str) -> dict[str, Any]:
        """Read a document by partition key and id.

        Args:
            partition_key: Partition key value
            document_id: Document id

        Returns:
            Document as dictionary (with Cosmos system fields removed)

        Raises:
            DocumentNotFoundError: No document exists for the pair
            StoreError: Any other failure
        """
        charge = RequestCharge()
        started = time.perf_counter()
        result_code: int | None = None
        success = False
        row_count: int | None = None
        try:
            container = await self._get_container()
            item = await container.read_item(item=document_id, partition_key=partition_key, response_hook=charge)
            result_code = 200
            success = True
            row_count = 1
            return {k: v for k, v in item.items() if k not in COSMOS_SYSTEM_FIELDS}
        except CosmosResourceNotFoundError as e:
            # Absence is an expected outcome, not a failed call
            result_code = 404
            success = True
            row_count = 0
            charge.add(e.headers)
            logger.debug("Document %s not found in partition %r", document_id, partition_key)
            raise DocumentNotFoundError(document_id, partition_key) from e
        except CosmosHttpResponseError as e:
            result_code = e.status_code
            charge.add(e.headers)
            logger.error("Cosmos DB read of %s failed (%s)", document_id, e.status_code)
            raise classify_store_error(e, READ_OPERATION) from e
        except (AzureError, TimeoutError) as e:
            logger.error("Cosmos DB read of %s failed: %s", document_id, e)
            raise classify_store_error(e, READ_OPERATION) from e
        finally:
            self._record(
                READ_OPERATION,
                started,
                charge,
                result_code=result_code,
                success=success,
                data=f"read {document_id} (partition {partition_key!r})",
                row_count=row_count,
            )

    def _record(
        self,
        operation: str,
        started: float,
        charge: RequestCharge,
        result_code: int | None,
        success: bool,
        data: str,
        row_count: int | None,
    ) -> None:
        """Send the samples for one store call to the metrics recorder.

        Runs in ``finally`` blocks, so it must not raise: a recorder failure
        would replace the call's own result or exception.
        """
        duration = time.perf_counter() - started
        name = f"{DEPENDENCY_NAME}.{operation}"

        try:
            self.metrics.track_duration(name, duration)
            if charge.total is not None:
                self.metrics.track_cost(name, charge.total)
            if row_count is not None:
                self.metrics.track_result_count(name, row_count)
            self.metrics.track_dependency(
                DependencyCall(
                    name=DEPENDENCY_NAME,
                    operation=operation,
                    target=self.endpoint,
                    data=data,
                    result_code=result_code,
                    success=success,
                    duration_seconds=duration,
                )
            )
        except Exception as e:
            logger.warning("Failed to record metrics for %s: %s", name, e)

    async def close(self) -> None:
        """Close the async client and any credential it owns."""
        await self.client.close()
        if self._credential is not None:
            await self._credential.close()
