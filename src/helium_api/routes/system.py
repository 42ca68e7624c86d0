"""Root-level system routes: plain-text health check and metrics."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from helium_api.routes.health import get_document_counts
from helium_api.services import get_document_service, get_metrics_recorder
from helium_common.exceptions import StoreError
from helium_common.services.document_service import DocumentService
from helium_common.telemetry.metrics import MetricsRecorder, PrometheusMetricsRecorder

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/healthz",
    response_class=PlainTextResponse,
    responses={
        status.HTTP_200_OK: {
            "content": {"text/plain": {"example": "Movies: 100\r\nActors: 553\r\nGenres: 20"}},
        },
    },
)
async def healthz(service: DocumentService = Depends(get_document_service)) -> PlainTextResponse:
    """Return a count of the Movies, Actors and Genres as text/plain."""
    try:
        counts = await get_document_counts(service)
    except StoreError as e:
        logger.error("Healthz failed: %s", e)
        return PlainTextResponse(f"Healthz Exception: {e}", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return PlainTextResponse("\r\n".join(f"{doc_type}s: {count}" for doc_type, count in counts.items()))


@router.get("/metrics", include_in_schema=False)
async def metrics(recorder: MetricsRecorder = Depends(get_metrics_recorder)) -> Response:
    """Expose store metrics in the Prometheus text format."""
    if not isinstance(recorder, PrometheusMetricsRecorder):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Metrics are disabled")
    return Response(content=generate_latest(recorder.registry), media_type=CONTENT_TYPE_LATEST)
