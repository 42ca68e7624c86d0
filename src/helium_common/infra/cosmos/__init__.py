"""Cosmos DB infrastructure."""

from helium_common.infra.cosmos.document_store import (
    CosmosDocumentStore,
    DocumentStore,
    RequestCharge,
    classify_store_error,
)

__all__ = ["CosmosDocumentStore", "DocumentStore", "RequestCharge", "classify_store_error"]
