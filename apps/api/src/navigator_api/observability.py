from __future__ import annotations

from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Protocol

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

_trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")


def set_trace_id(trace_id: str) -> None:
    _trace_id_ctx.set(trace_id)


def get_trace_id() -> str:
    return _trace_id_ctx.get()


@dataclass(frozen=True)
class RequestMetric:
    method: str
    path: str
    status_code: int
    duration_ms: float
    trace_id: str


class RequestMetricCollector(Protocol):
    def observe(self, metric: RequestMetric) -> None: ...


class InMemoryRequestMetricsCollector(RequestMetricCollector):
    def __init__(self) -> None:
        self._metrics: list[RequestMetric] = []

    def observe(self, metric: RequestMetric) -> None:
        self._metrics.append(metric)

    def snapshot(self) -> list[dict]:
        return [asdict(item) for item in self._metrics]


class PrometheusRequestMetricsCollector(RequestMetricCollector):
    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._request_counter = Counter(
            "navigator_http_requests_total",
            "Total navigator HTTP requests",
            labelnames=("method", "path", "status_code"),
            registry=self._registry,
        )
        # route planning fans out to several providers, hence the long tail buckets
        self._latency_histogram = Histogram(
            "navigator_http_request_duration_ms",
            "Navigator HTTP request latency in milliseconds",
            labelnames=("method", "path"),
            buckets=(10, 50, 100, 250, 500, 1000, 2500, 5000, 10000, 30000),
            registry=self._registry,
        )

    def observe(self, metric: RequestMetric) -> None:
        status = str(metric.status_code)
        self._request_counter.labels(metric.method, metric.path, status).inc()
        self._latency_histogram.labels(metric.method, metric.path).observe(metric.duration_ms)

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")


class CompositeRequestMetricsCollector(RequestMetricCollector):
    def __init__(self, collectors: list[RequestMetricCollector]) -> None:
        self._collectors = collectors

    def observe(self, metric: RequestMetric) -> None:
        for collector in self._collectors:
            collector.observe(metric)


class RecoveredFailureMetrics:
    """Counts provider failures the navigator absorbed instead of failing the request.

    Events are the log event names, e.g. ``provider_sample_failed`` or
    ``alternate_route_unavailable``; a rising rate means scores and route sets
    are being computed from partial data.
    """

    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._failures = Counter(
            "navigator_recovered_failures_total",
            "Provider failures absorbed by the navigator",
            labelnames=("event",),
            registry=self._registry,
        )

    def record(self, event: str) -> None:
        self._failures.labels(event).inc()

    def count(self, event: str) -> float:
        return self._registry.get_sample_value("navigator_recovered_failures_total", {"event": event}) or 0.0

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")
