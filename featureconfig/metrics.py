from __future__ import annotations

"""Prometheus metrics for feature configuration fetches."""

from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest

registry = CollectorRegistry()

fetch_total = Counter(
    "feature_config_fetch_total",
    "Feature evaluation fetches by outcome",
    ["outcome"],
    registry=registry,
)

dropped_evaluations_total = Counter(
    "feature_config_dropped_evaluations_total",
    "Remote evaluations discarded because the feature is not registered",
    registry=registry,
)

cached_features = Gauge(
    "feature_config_cached_features",
    "Number of feature evaluations in the current snapshot",
    registry=registry,
)


def record_fetch(outcome: str) -> None:
    fetch_total.labels(outcome=outcome).inc()


def record_dropped(count: int = 1) -> None:
    if count > 0:
        dropped_evaluations_total.inc(count)


def collect_metrics() -> str:
    """Return the metrics in Prometheus text exposition format."""

    return generate_latest(registry).decode()


def reset_metrics() -> None:
    """Reset all metric values for tests."""

    fetch_total.clear()
    dropped_evaluations_total._value.set(0)
    cached_features.set(0)


__all__ = [
    "cached_features",
    "collect_metrics",
    "dropped_evaluations_total",
    "fetch_total",
    "record_dropped",
    "record_fetch",
    "registry",
    "reset_metrics",
]
