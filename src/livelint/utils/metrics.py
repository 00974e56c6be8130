"""In-process metrics for analysis passes.

This module tracks:
- Analysis passes per profile
- Diagnostics per category
- Corrections offered and applied
- Debounce resets and skipped empty-buffer passes
- Pass duration histogram

Metrics can be read as a dict or exported in Prometheus text format.
"""

from __future__ import annotations

import time
from collections import defaultdict
from dataclasses import dataclass, field
from enum import StrEnum
from threading import Lock
from typing import Any


LabelKey = tuple[tuple[str, str], ...]


def _label_key(labels: dict[str, str] | None) -> LabelKey:
    return tuple(sorted(labels.items())) if labels else ()


class MetricType(StrEnum):
    """Types of metrics."""

    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"


@dataclass
class MetricValue:
    """A single labelled metric value."""

    name: str
    type: MetricType
    value: float
    labels: dict[str, str] = field(default_factory=dict)
    help_text: str = ""


class _LabelledMetric:
    """Shared storage for counters and gauges."""

    metric_type = MetricType.GAUGE

    def __init__(self, name: str, help_text: str = "") -> None:
        self.name = name
        self.help_text = help_text
        self._values: dict[LabelKey, float] = defaultdict(float)
        self._lock = Lock()

    def _add(self, value: float, labels: dict[str, str] | None) -> None:
        with self._lock:
            self._values[_label_key(labels)] += value

    def get(self, labels: dict[str, str] | None = None) -> float:
        """Current value for a label set (0 if never touched)."""
        with self._lock:
            return self._values.get(_label_key(labels), 0)

    def total(self) -> float:
        """Sum across all label sets."""
        with self._lock:
            return sum(self._values.values())

    def get_all(self) -> list[MetricValue]:
        """All values with their labels."""
        with self._lock:
            return [
                MetricValue(
                    name=self.name,
                    type=self.metric_type,
                    value=value,
                    labels=dict(key),
                    help_text=self.help_text,
                )
                for key, value in self._values.items()
            ]


class Counter(_LabelledMetric):
    """A monotonically increasing counter.

    Example:
        counter = Counter("passes_total", "Analysis passes")
        counter.inc()
        counter.inc(labels={"profile": "python"})
    """

    metric_type = MetricType.COUNTER

    def inc(self, value: float = 1, labels: dict[str, str] | None = None) -> None:
        """Increment the counter.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("Counter can only increase")
        self._add(value, labels)


class Gauge(_LabelledMetric):
    """A metric that can go up or down."""

    def set(self, value: float, labels: dict[str, str] | None = None) -> None:
        """Set the gauge value."""
        with self._lock:
            self._values[_label_key(labels)] = value

    def inc(self, value: float = 1, labels: dict[str, str] | None = None) -> None:
        """Increment the gauge."""
        self._add(value, labels)

    def dec(self, value: float = 1, labels: dict[str, str] | None = None) -> None:
        """Decrement the gauge."""
        self._add(-value, labels)


class Histogram:
    """A histogram of observed values.

    Example:
        histogram = Histogram("pass_duration_seconds", "Pass duration")
        histogram.observe(0.002)
    """

    # Analysis passes are expected to take milliseconds
    DEFAULT_BUCKETS = (0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, float("inf"))

    def __init__(
        self,
        name: str,
        help_text: str = "",
        buckets: tuple[float, ...] | None = None,
    ) -> None:
        self.name = name
        self.help_text = help_text
        self._buckets = buckets or self.DEFAULT_BUCKETS
        self._observations: dict[LabelKey, list[float]] = defaultdict(list)
        self._lock = Lock()

    def observe(self, value: float, labels: dict[str, str] | None = None) -> None:
        """Record an observation."""
        with self._lock:
            self._observations[_label_key(labels)].append(value)

    def get_stats(self, labels: dict[str, str] | None = None) -> dict[str, float]:
        """Count, sum, min, max and mean for a label set."""
        with self._lock:
            values = list(self._observations.get(_label_key(labels), []))

        if not values:
            return {"count": 0, "sum": 0, "min": 0, "max": 0, "mean": 0}

        return {
            "count": len(values),
            "sum": sum(values),
            "min": min(values),
            "max": max(values),
            "mean": sum(values) / len(values),
        }

    def get_buckets(self, labels: dict[str, str] | None = None) -> dict[float, int]:
        """Non-cumulative count per bucket boundary."""
        with self._lock:
            values = list(self._observations.get(_label_key(labels), []))

        counts: dict[float, int] = dict.fromkeys(self._buckets, 0)
        for value in values:
            for bucket in self._buckets:
                if value <= bucket:
                    counts[bucket] += 1
                    break
        return counts


class MetricsRegistry:
    """Registry for all livelint metrics.

    Example:
        registry = MetricsRegistry.get_instance()
        registry.passes.inc(labels={"profile": "generic"})
        metrics = registry.get_all_metrics()
    """

    PREFIX = "livelint"

    _instance: MetricsRegistry | None = None
    _lock = Lock()

    def __init__(self) -> None:
        """Initialize the metrics registry."""
        self.passes = Counter(f"{self.PREFIX}_passes_total", "Total analysis passes run")
        self.diagnostics = Counter(
            f"{self.PREFIX}_diagnostics_total",
            "Total diagnostics reported, by category",
        )
        self.corrections_offered = Counter(
            f"{self.PREFIX}_corrections_offered_total",
            "Passes that produced a corrected buffer",
        )
        self.corrections_applied = Counter(
            f"{self.PREFIX}_corrections_applied_total",
            "Corrected buffers applied by the caller",
        )
        self.debounce_resets = Counter(
            f"{self.PREFIX}_debounce_resets_total",
            "Pending passes superseded by a newer edit",
        )
        self.skipped_passes = Counter(
            f"{self.PREFIX}_skipped_empty_passes_total",
            "Passes skipped because the buffer became empty",
        )
        self.pending_sessions = Gauge(
            f"{self.PREFIX}_pending_sessions",
            "Sessions with a pass waiting on the debounce timer",
        )
        self.pass_duration = Histogram(
            f"{self.PREFIX}_pass_duration_seconds",
            "Analysis pass duration in seconds",
        )
        self._start_time = time.time()

    @classmethod
    def get_instance(cls) -> MetricsRegistry:
        """Get the singleton metrics registry instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next get_instance() starts from zero."""
        with cls._lock:
            cls._instance = None

    def get_uptime_seconds(self) -> float:
        """Seconds since the registry was created."""
        return time.time() - self._start_time

    def _counters(self) -> list[Counter]:
        return [
            self.passes,
            self.diagnostics,
            self.corrections_offered,
            self.corrections_applied,
            self.debounce_resets,
            self.skipped_passes,
        ]

    def get_all_metrics(self) -> dict[str, Any]:
        """Get all metrics as a dictionary."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "passes": {
                "total": self.passes.total(),
                "by_profile": {
                    m.labels.get("profile", ""): m.value for m in self.passes.get_all()
                },
                "skipped_empty": self.skipped_passes.get(),
                "debounce_resets": self.debounce_resets.get(),
                "pending_sessions": self.pending_sessions.get(),
                "duration_stats": self.pass_duration.get_stats(),
            },
            "diagnostics": {
                m.labels.get("category", ""): m.value for m in self.diagnostics.get_all()
            },
            "corrections": {
                "offered": self.corrections_offered.get(),
                "applied": self.corrections_applied.get(),
            },
        }

    def to_prometheus_format(self) -> str:
        """Export metrics in Prometheus text format."""
        lines: list[str] = []

        for metric in [*self._counters(), self.pending_sessions]:
            if metric.help_text:
                lines.append(f"# HELP {metric.name} {metric.help_text}")
            lines.append(f"# TYPE {metric.name} {metric.metric_type}")
            for value in metric.get_all():
                if value.labels:
                    label_str = ",".join(f'{k}="{v}"' for k, v in value.labels.items())
                    lines.append(f"{metric.name}{{{label_str}}} {value.value}")
                else:
                    lines.append(f"{metric.name} {value.value}")

        stats = self.pass_duration.get_stats()
        lines.append(f"# TYPE {self.pass_duration.name} summary")
        lines.append(f"{self.pass_duration.name}_count {stats['count']}")
        lines.append(f"{self.pass_duration.name}_sum {stats['sum']}")

        lines.append(f"# TYPE {self.PREFIX}_uptime_seconds gauge")
        lines.append(f"{self.PREFIX}_uptime_seconds {self.get_uptime_seconds()}")
        return "\n".join(lines)


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    return MetricsRegistry.get_instance()


class Timer:
    """Context manager for timing operations.

    Example:
        with Timer(get_metrics().pass_duration):
            analyze(buffer)
    """

    def __init__(
        self,
        histogram: Histogram,
        labels: dict[str, str] | None = None,
    ) -> None:
        self._histogram = histogram
        self._labels = labels
        self._start: float | None = None
        self.elapsed: float | None = None

    def __enter__(self) -> Timer:
        """Start timing."""
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        """Stop timing and record."""
        if self._start is not None:
            self.elapsed = time.perf_counter() - self._start
            self._histogram.observe(self.elapsed, labels=self._labels)
