"""Metrics recorder: a fire-and-forget sink for store call telemetry."""

import logging
from abc import ABC, abstractmethod

from prometheus_client import CollectorRegistry, Counter, Histogram
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

REQUEST_UNIT_BUCKETS = (1.0, 2.5, 5.0, 10.0, 25.0, 50.0, 100.0, 250.0, 500.0, 1000.0)
RESULT_COUNT_BUCKETS = (0, 1, 5, 10, 25, 50, 100, 250, 500, 1000)


class DependencyCall(BaseModel):
    """One call to an external dependency."""

    name: str = Field(..., description="Dependency name, e.g. 'CosmosDB'")
    operation: str = Field(..., description="Operation name")
    target: str = Field("", description="Endpoint the call went to")
    data: str = Field("", description="Call description, e.g. the query text")
    result_code: int | None = Field(None, description="Store or HTTP status code")
    success: bool = Field(..., description="Whether the call succeeded")
    duration_seconds: float = Field(..., description="Wall-clock duration")


class MetricsRecorder(ABC):
    """Abstract interface for the metrics sink.

    Implementations must never raise: a failure to record is logged and
    dropped so it cannot affect the operation being measured.
    """

    @abstractmethod
    def track_duration(self, name: str, seconds: float) -> None:
        """Record a duration sample."""

    @abstractmethod
    def track_cost(self, name: str, request_units: float) -> None:
        """Record the store-reported resource cost of a call."""

    @abstractmethod
    def track_result_count(self, name: str, count: int) -> None:
        """Record how many rows a call returned."""

    @abstractmethod
    def track_dependency(self, call: DependencyCall) -> None:
        """Record a dependency call."""


class NullMetricsRecorder(MetricsRecorder):
    """Recorder that drops everything."""

    def track_duration(self, name: str, seconds: float) -> None:
        pass

    def track_cost(self, name: str, request_units: float) -> None:
        pass

    def track_result_count(self, name: str, count: int) -> None:
        pass

    def track_dependency(self, call: DependencyCall) -> None:
        pass


class PrometheusMetricsRecorder(MetricsRecorder):
    """Prometheus implementation of MetricsRecorder.

    Each instance owns its registry so several recorders (one per app, or per
    test) never collide on metric names.
    """

    def __init__(self, registry: CollectorRegistry | None = None, namespace: str = "helium") -> None:
        """Initialize the Prometheus collectors.

        Args:
            registry: Registry to publish to. A new one is created if None.
            namespace: Prefix for every metric name
        """
        self.registry = registry or CollectorRegistry()

        self._durations = Histogram(
            "operation_duration_seconds",
            "Duration of store operations and requests",
            labelnames=["operation"],
            namespace=namespace,
            registry=self.registry,
        )
        self._costs = Histogram(
            "request_units",
            "Store-reported request charge per operation",
            labelnames=["operation"],
            namespace=namespace,
            buckets=REQUEST_UNIT_BUCKETS,
            registry=self.registry,
        )
        self._result_counts = Histogram(
            "result_rows",
            "Rows returned per store operation",
            labelnames=["operation"],
            namespace=namespace,
            buckets=RESULT_COUNT_BUCKETS,
            registry=self.registry,
        )
        self._dependency_calls = Counter(
            "dependency_calls_total",
            "Calls to external dependencies",
            labelnames=["dependency", "operation", "result_code", "success"],
            namespace=namespace,
            registry=self.registry,
        )

    def track_duration(self, name: str, seconds: float) -> None:
        try:
            self._durations.labels(operation=name).observe(max(0.0, seconds))
        except Exception as e:
            logger.warning("Failed to record duration for %s: %s", name, e)

    def track_cost(self, name: str, request_units: float) -> None:
        try:
            self._costs.labels(operation=name).observe(request_units)
        except Exception as e:
            logger.warning("Failed to record cost for %s: %s", name, e)

    def track_result_count(self, name: str, count: int) -> None:
        try:
            self._result_counts.labels(operation=name).observe(count)
        except Exception as e:
            logger.warning("Failed to record result count for %s: %s", name, e)

    def track_dependency(self, call: DependencyCall) -> None:
        try:
            self._dependency_calls.labels(
                dependency=call.name,
                operation=call.operation,
                result_code=str(call.result_code) if call.result_code is not None else "",
                success=str(call.success).lower(),
            ).inc()
            logger.debug(
                "Dependency %s %s -> %s (success=%s, %.1f ms): %s",
                call.name,
                call.operation,
                call.result_code,
                call.success,
                call.duration_seconds * 1000.0,
                call.data,
            )
        except Exception as e:
            logger.warning("Failed to record dependency call %s: %s", call.operation, e)
