"""Builds the Cosmos SQL queries used by the document service."""

from helium_common.models.documents import DocumentType
from helium_common.models.query import QueryParameter, QuerySpec

FILTER_PARAMETER = "@filter"
TYPE_PARAMETER = "@type"

# Fixed projection per document type
PROJECTIONS: dict[DocumentType, str] = {
    DocumentType.ACTOR: (
        "root.id, root.partitionKey, root.actorId, root.type, root.name, root.birthYear, "
        "root.deathYear, root.profession, root.textSearch, root.movies"
    ),
    DocumentType.MOVIE: (
        "root.id, root.partitionKey, root.movieId, root.type, root.textSearch, root.title, "
        "root.year, root.runtime, root.rating, root.votes, root.totalScore, root.genres, root.roles"
    ),
    DocumentType.GENRE: "VALUE root.id",
}


def build_list_query(doc_type: DocumentType, text_filter: str | None = None) -> QuerySpec:
    """Build the query listing documents of one type.

    ``None`` means no filter. Any string, including the empty string, is
    lower-cased and matched as a substring of ``textSearch``.

    Args:
        doc_type: Document type to select
        text_filter: Optional case-insensitive substring filter

    Returns:
        Query spec with zero or one bound parameter
    """
    doc_type = DocumentType(doc_type)
    select = f"SELECT {PROJECTIONS[doc_type]} FROM root"

    if text_filter is None:
        return QuerySpec(query=f"{select} WHERE root.type = '{doc_type.value}'")

    return QuerySpec(
        query=f"{select} WHERE CONTAINS(root.textSearch, {FILTER_PARAMETER}) AND root.type = '{doc_type.value}'",
        parameters=[QueryParameter(name=FILTER_PARAMETER, value=text_filter.lower())],
    )


def build_count_query(doc_type: DocumentType) -> QuerySpec:
    """Build the query returning the number of documents of one type as a scalar."""
    doc_type = DocumentType(doc_type)
    return QuerySpec(
        query=f"SELECT VALUE COUNT(1) FROM root WHERE root.type = {TYPE_PARAMETER}",
        parameters=[QueryParameter(name=TYPE_PARAMETER, value=doc_type.value)],
    )
