"""Prometheus counter of quality gate conditions the server reported as failing."""
from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PrometheusCounter

_process_counts: Counter[str] = Counter()

_failure_counter = PrometheusCounter(
    "qualitygate_condition_failures_total",
    "Quality gate conditions seen in ERROR status, by metric key.",
    ["metric"],
)


def increment_failure_metric(metric_key: str, count: int = 1) -> None:
    """Record ``count`` failing conditions on ``metric_key``."""

    if not metric_key:
        return
    _process_counts[metric_key] += count
    _failure_counter.labels(metric=metric_key).inc(count)


def snapshot_failure_counts() -> Dict[str, int]:
    """Failing conditions per metric key seen by this process since the last reset."""

    return dict(_process_counts)


def reset_failure_counts() -> None:
    """Forget the per-process tally; the exported Prometheus counter keeps growing."""

    _process_counts.clear()
