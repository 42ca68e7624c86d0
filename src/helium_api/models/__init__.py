"""API response models."""

from helium_api.models.health import HealthCheckResponse

__all__ = ["HealthCheckResponse"]
