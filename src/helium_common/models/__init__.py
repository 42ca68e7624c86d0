"""Common models package."""

from helium_common.models.documents import Actor, DocumentType, Movie
from helium_common.models.query import QueryOptions, QueryParameter, QuerySpec

__all__ = [
    "Actor",
    "DocumentType",
    "Movie",
    "QueryOptions",
    "QueryParameter",
    "QuerySpec",
]
