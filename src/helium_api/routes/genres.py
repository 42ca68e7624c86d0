"""Genre API routes."""

from fastapi import APIRouter, Depends

from helium_api.services import get_document_service
from helium_common.services.document_service import DocumentService

router = APIRouter(prefix="/genres", tags=["genres"], redirect_slashes=False)


@router.get("", response_model=list[str])
@router.get("/", response_model=list[str], include_in_schema=False)
async def list_genres(service: DocumentService = Depends(get_document_service)) -> list[str]:
    return await service.list_genres()
