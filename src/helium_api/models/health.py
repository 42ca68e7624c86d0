"""Health check response models."""

from pydantic import BaseModel, ConfigDict, Field


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str | None = None
    message: str = "API is healthy"
    counts: dict[str, int] = Field(default_factory=dict, description="Document count per type")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "ok",
                "version": "1.0.0",
                "environment": "development",
                "message": "API is healthy",
                "counts": {"Movie": 100, "Actor": 553, "Genre": 20},
            }
        }
    )
