"""Infrastructure layer for external communication."""

from helium_common.infra.cosmos import CosmosDocumentStore, DocumentStore

__all__ = ["CosmosDocumentStore", "DocumentStore"]
