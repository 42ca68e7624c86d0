"""Service layer: read-only queries over movie, actor and genre documents."""

import logging
from typing import Any

from helium_common.exceptions import DocumentNotFoundError
from helium_common.infra.cosmos.document_store import DocumentStore
from helium_common.models.documents import DocumentType
from helium_common.models.query import QueryOptions
from helium_common.services.partition_key import DEFAULT_PARTITION_KEY, get_partition_key
from helium_common.services.query_builder import build_count_query, build_list_query

logger = logging.getLogger(__name__)


class DocumentService:
    """Service layer: turns list/get/count requests into store calls.

    Every call goes to the store; nothing is cached. Store failures other
    than a missing document propagate unchanged.
    """

    def __init__(self, store: DocumentStore, cross_partition_query: bool = True) -> None:
        """Initialize the document service.

        Args:
            store: Document store to query
            cross_partition_query: Fan-out option for list and count queries
        """
        self.store = store
        self.query_options = QueryOptions(
            enable_cross_partition_query=cross_partition_query, partition_key=DEFAULT_PARTITION_KEY
        )

    async def list_by_type(self, doc_type: DocumentType, text_filter: str | None = None) -> list[Any]:
        """List documents of one type, optionally filtered on textSearch.

        Args:
            doc_type: Document type
            text_filter: Case-insensitive substring. None means no filter;
                an empty string matches every document with a textSearch.

        Returns:
            Projected rows
        """
        query = build_list_query(doc_type, text_filter)
        rows = await self.store.query_documents(query, self.query_options)
        logger.debug("Listed %d %s documents (filter=%r)", len(rows), DocumentType(doc_type).value, text_filter)
        return rows

    async def get_by_id(self, doc_type: DocumentType, document_id: str) -> dict[str, Any] | None:
        """Get a document by id.

        Args:
            doc_type: Expected document type
            document_id: Document id

        Returns:
            The document, or None if it does not exist or is of another type
        """
        partition_key = get_partition_key(document_id)
        try:
            document = await self.store.get_document(partition_key, document_id)
        except DocumentNotFoundError:
            return None

        if document.get("type") != DocumentType(doc_type).value:
            logger.debug("Document %s has type %r, expected %s", document_id, document.get("type"), doc_type)
            return None
        return document

    async def count_by_type(self, doc_type: DocumentType) -> int:
        """Count documents of one type."""
        rows = await self.store.query_documents(build_count_query(doc_type), self.query_options)
        return int(rows[0]) if rows else 0

    async def list_genres(self) -> list[str]:
        """List every genre id."""
        return await self.list_by_type(DocumentType.GENRE)
