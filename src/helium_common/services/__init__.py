"""Common services package."""

from helium_common.services.document_service import DocumentService
from helium_common.services.partition_key import get_partition_key
from helium_common.services.query_builder import build_count_query, build_list_query

__all__ = [
    "DocumentService",
    "build_count_query",
    "build_list_query",
    "get_partition_key",
]
