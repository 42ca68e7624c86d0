"""Actor API routes."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from helium_api.services import get_document_service
from helium_common.models.documents import Actor, DocumentType
from helium_common.services.document_service import DocumentService

router = APIRouter(prefix="/actors", tags=["actors"], redirect_slashes=False)

ACTOR_DOES_NOT_EXIST = "An Actor with that ID does not exist"


@router.get("", response_model=None, responses={status.HTTP_200_OK: {"model": list[Actor]}})
@router.get("/", response_model=None, include_in_schema=False)
async def list_actors(
    q: str | None = Query(None, description="The actor name to filter by."),
    service: DocumentService = Depends(get_document_service),
) -> list[Any]:
    """Retrieve and return all actors, optionally filtered by name."""
    return await service.list_by_type(DocumentType.ACTOR, q)


@router.get(
    "/{actor_id}",
    response_model=None,
    responses={
        status.HTTP_200_OK: {"model": Actor},
        status.HTTP_404_NOT_FOUND: {"description": "An actor with the specified ID was not found."},
    },
)
async def get_actor(actor_id: str, service: DocumentService = Depends(get_document_service)) -> dict[str, Any]:
    """Retrieve and return a single actor by actor ID."""
    actor = await service.get_by_id(DocumentType.ACTOR, actor_id)
    if actor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ACTOR_DOES_NOT_EXIST)
    return actor
