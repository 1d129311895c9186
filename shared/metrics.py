"""
Shared metrics configuration for the document registry client.
"""

from typing import Dict, Any, Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class SubmissionMetrics:
    """Prometheus metrics for document submissions.

    Each instance owns its own ``CollectorRegistry`` unless one is passed in,
    so several submitters can coexist in one process.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up submission metrics."""
        self._metrics["submissions_total"] = Counter(
            "registry_submissions_total",
            "Total document submissions by outcome",
            ["outcome"],
            registry=self.registry
        )

        self._metrics["submission_duration_seconds"] = Histogram(
            "registry_submission_duration_seconds",
            "Time spent encoding and dispatching admitted submissions",
            registry=self.registry
        )

        self._metrics["window_count"] = Gauge(
            "registry_window_request_count",
            "Admission attempts counted in the current window",
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_outcome(self, outcome: str, duration: Optional[float] = None):
        """Record the outcome of one submission."""
        self._metrics["submissions_total"].labels(outcome=outcome).inc()
        if duration is not None:
            self._metrics["submission_duration_seconds"].observe(duration)

    def set_window_count(self, count: int):
        """Record the counter value observed by the latest admission check."""
        self._metrics["window_count"].set(count)

    def export(self) -> bytes:
        """Render metrics in the Prometheus text exposition format."""
        return generate_latest(self.registry)
