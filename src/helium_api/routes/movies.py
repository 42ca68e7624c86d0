"""Movie API routes."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from helium_api.services import get_document_service
from helium_common.models.documents import DocumentType, Movie
from helium_common.services.document_service import DocumentService

router = APIRouter(prefix="/movies", tags=["movies"], redirect_slashes=False)

MOVIE_DOES_NOT_EXIST = "A Movie with that ID does not exist"


@router.get("", response_model=None, responses={status.HTTP_200_OK: {"model": list[Movie]}})
@router.get("/", response_model=None, include_in_schema=False)
async def list_movies(
    q: str | None = Query(None, description="The movie title to filter by."),
    service: DocumentService = Depends(get_document_service),
) -> list[Any]:
    """Retrieve and return all movies, optionally filtered by title.

    The textSearch field starts with the lower-cased title, so the filter
    also matches on related terms that follow it.
    """
    return await service.list_by_type(DocumentType.MOVIE, q)


@router.get(
    "/{movie_id}",
    response_model=None,
    responses={
        status.HTTP_200_OK: {"model": Movie},
        status.HTTP_404_NOT_FOUND: {"description": "A movie with the specified ID was not found."},
    },
)
async def get_movie(movie_id: str, service: DocumentService = Depends(get_document_service)) -> dict[str, Any]:
    """Retrieve and return a single movie by movie ID."""
    movie = await service.get_by_id(DocumentType.MOVIE, movie_id)
    if movie is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_DOES_NOT_EXIST)
    return movie
