"""Health check routes."""

import logging

from fastapi import APIRouter, Depends, Response, status

from helium_api.config import Settings, get_settings
from helium_api.models.health import HealthCheckResponse
from helium_api.services import get_document_service
from helium_common.exceptions import StoreError
from helium_common.models.documents import DocumentType
from helium_common.services.document_service import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

# Order in which counts are reported
COUNTED_TYPES = (DocumentType.MOVIE, DocumentType.ACTOR, DocumentType.GENRE)


async def get_document_counts(service: DocumentService) -> dict[str, int]:
    """Count the documents of every type.

    Args:
        service: Document service

    Returns:
        Mapping of type name to count, in reporting order
    """
    return {doc_type.value: await service.count_by_type(doc_type) for doc_type in COUNTED_TYPES}


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthCheckResponse}},
)
async def health_check(
    response: Response,
    settings: Settings = Depends(get_settings),
    service: DocumentService = Depends(get_document_service),
) -> HealthCheckResponse:
    """Health check endpoint.

    Returns:
        HealthCheckResponse with status, version and document counts
    """
    try:
        counts = await get_document_counts(service)
    except StoreError as e:
        logger.error("Health check failed: %s", e)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthCheckResponse(
            status="error",
            version=settings.app_version,
            environment=settings.environment,
            message=str(e) if settings.expose_store_errors else "Document store unavailable",
        )

    return HealthCheckResponse(
        status="ok",
        version=settings.app_version,
        environment=settings.environment,
        counts=counts,
    )
