"""Telemetry package."""

from helium_common.telemetry.metrics import (
    DependencyCall,
    MetricsRecorder,
    NullMetricsRecorder,
    PrometheusMetricsRecorder,
)

__all__ = [
    "DependencyCall",
    "MetricsRecorder",
    "NullMetricsRecorder",
    "PrometheusMetricsRecorder",
]
