"""Service initialization and dependency injection."""

import logging

from fastapi import Depends, Request

from helium_api.config import Settings
from helium_common.config.store_config import StoreConfig
from helium_common.infra.cosmos.document_store import CosmosDocumentStore, DocumentStore
from helium_common.services.document_service import DocumentService
from helium_common.telemetry.metrics import MetricsRecorder, NullMetricsRecorder, PrometheusMetricsRecorder

logger = logging.getLogger(__name__)


class HeliumServices:
    """Collaborators built once at startup and shared by every request."""

    def __init__(
        self,
        metrics: MetricsRecorder,
        store: DocumentStore | None = None,
        document_service: DocumentService | None = None,
    ) -> None:
        self.metrics = metrics
        self.store = store
        self.document_service = document_service

    async def close(self) -> None:
        """Release the store client."""
        if self.store is not None:
            await self.store.close()


def build_services(settings: Settings, store_config: StoreConfig) -> HeliumServices:
    """Build the service container.

    Args:
        settings: Application settings
        store_config: Document store configuration

    Returns:
        HeliumServices instance. Without a Cosmos endpoint the store is left
        unset outside production.
    """
    metrics: MetricsRecorder = PrometheusMetricsRecorder() if settings.metrics_enabled else NullMetricsRecorder()

    if not store_config.azure_cosmosdb_endpoint:
        if settings.environment == "production":
            raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")
        logger.warning("Cosmos DB endpoint not configured. Data routes will fail until it is set.")
        return HeliumServices(metrics=metrics)

    store = CosmosDocumentStore.from_config(store_config, metrics)
    logger.info(
        "Initialized CosmosDocumentStore for %s/%s (managed identity: %s)",
        store_config.cosmos_database,
        store_config.cosmos_collection,
        store_config.use_managed_identity,
    )
    return HeliumServices(
        metrics=metrics,
        store=store,
        document_service=DocumentService(store, cross_partition_query=store_config.cosmos_cross_partition_query),
    )


def get_services(request: Request) -> HeliumServices:
    """Get the service container built at startup."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services have not been initialized")
    return services


def get_document_service(services: HeliumServices = Depends(get_services)) -> DocumentService:
    """Get the document service.

    Args:
        services: Service container

    Returns:
        DocumentService instance
    """
    if services.document_service is None:
        raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")
    return services.document_service


def get_metrics_recorder(services: HeliumServices = Depends(get_services)) -> MetricsRecorder:
    """Get the metrics recorder."""
    return services.metrics
