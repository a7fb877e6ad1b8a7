"""
Metrics Collection
Prometheus metrics for streamed markup hydration
"""

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for hydration.
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        self.registry = registry

        # Frame metrics
        self.frames_total = Counter(
            "mdx_frames_total",
            "Total number of stream frames processed",
            ["outcome"],
            registry=registry,
        )
        self.hydration_duration = Histogram(
            "mdx_hydration_duration_seconds",
            "Parse and walk duration per document in seconds",
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
            registry=registry,
        )

        # Diagnostic metrics
        self.diagnostics_total = Counter(
            "mdx_diagnostics_total",
            "Total number of hydration diagnostics",
            ["kind"],
            registry=registry,
        )

        # Stream metrics
        self.streams_total = Counter(
            "mdx_streams_total",
            "Total number of finished streams",
            ["status"],
            registry=registry,
        )

        # Error metrics
        self.errors_total = Counter(
            "mdx_errors_total",
            "Total number of surfaced hydration errors",
            ["error_type"],
            registry=registry,
        )

    def record_frame(self, outcome: str) -> None:
        """Record a frame as hydrated or skipped."""
        self.frames_total.labels(outcome=outcome).inc()

    def record_diagnostic(self, kind: str) -> None:
        """Record a diagnostic."""
        self.diagnostics_total.labels(kind=kind).inc()

    def record_stream(self, status: str) -> None:
        """Record how a stream ended."""
        self.streams_total.labels(status=status).inc()

    def record_error(self, error_type: str) -> None:
        """Record a surfaced error."""
        self.errors_total.labels(error_type=error_type).inc()

    @contextmanager
    def measure_hydration(self) -> Iterator[None]:
        """Context manager to measure one parse + walk."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.hydration_duration.observe(time.perf_counter() - start)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
