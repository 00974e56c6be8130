"""Tests for the metrics collection module."""

import time

import pytest

from livelint.utils.metrics import (
    Counter,
    Gauge,
    Histogram,
    MetricsRegistry,
    MetricType,
    Timer,
    get_metrics,
)


class TestCounter:
    """Tests for Counter metric."""

    def test_counter_initial_value(self) -> None:
        """Test counter starts at zero."""
        assert Counter("test_counter", "Test counter").get() == 0

    def test_counter_increment(self) -> None:
        """Test counter increments by default and explicit values."""
        counter = Counter("test_counter")
        counter.inc()
        counter.inc(4)
        assert counter.get() == 5

    def test_counter_with_labels(self) -> None:
        """Test counters keep one value per label set."""
        counter = Counter("passes")
        counter.inc(labels={"profile": "python"})
        counter.inc(labels={"profile": "python"})
        counter.inc(labels={"profile": "sql"})

        assert counter.get({"profile": "python"}) == 2
        assert counter.get({"profile": "sql"}) == 1
        assert counter.get() == 0
        assert counter.total() == 3

    def test_counter_cannot_decrease(self) -> None:
        """Test negative increments are rejected."""
        with pytest.raises(ValueError, match="Counter can only increase"):
            Counter("test_counter").inc(-1)

    def test_counter_get_all(self) -> None:
        """Test get_all returns labelled values."""
        counter = Counter("diagnostics", "help")
        counter.inc(labels={"category": "SpellingError"})

        values = counter.get_all()

        assert len(values) == 1
        assert values[0].type == MetricType.COUNTER
        assert values[0].labels == {"category": "SpellingError"}
        assert values[0].help_text == "help"


class TestGauge:
    """Tests for Gauge metric."""

    def test_gauge_set_inc_dec(self) -> None:
        """Test gauge set, increment and decrement."""
        gauge = Gauge("pending")
        gauge.set(5)
        gauge.inc()
        gauge.dec(2)
        assert gauge.get() == 4

    def test_gauge_can_be_negative(self) -> None:
        """Test gauges may go below zero."""
        gauge = Gauge("pending")
        gauge.dec()
        assert gauge.get() == -1


class TestHistogram:
    """Tests for Histogram metric."""

    def test_histogram_stats(self) -> None:
        """Test count, sum, min, max and mean."""
        histogram = Histogram("duration")
        for value in (0.002, 0.004, 0.006):
            histogram.observe(value)

        stats = histogram.get_stats()

        assert stats["count"] == 3
        assert stats["min"] == 0.002
        assert stats["max"] == 0.006
        assert stats["mean"] == pytest.approx(0.004)

    def test_histogram_empty(self) -> None:
        """Test stats for an unobserved histogram are zero."""
        assert Histogram("duration").get_stats()["count"] == 0

    def test_histogram_buckets(self) -> None:
        """Test each observation lands in its smallest bucket."""
        histogram = Histogram("duration", buckets=(0.01, 0.1, float("inf")))
        histogram.observe(0.005)
        histogram.observe(0.05)
        histogram.observe(5)

        assert histogram.get_buckets() == {0.01: 1, 0.1: 1, float("inf"): 1}

    def test_histogram_with_labels(self) -> None:
        """Test observations are kept per label set."""
        histogram = Histogram("duration")
        histogram.observe(1, labels={"profile": "sql"})
        assert histogram.get_stats({"profile": "sql"})["count"] == 1
        assert histogram.get_stats()["count"] == 0


class TestMetricsRegistry:
    """Tests for MetricsRegistry."""

    def test_singleton_instance(self) -> None:
        """Test get_instance returns the same registry."""
        assert MetricsRegistry.get_instance() is MetricsRegistry.get_instance()
        assert get_metrics() is MetricsRegistry.get_instance()

    def test_reset_instance(self) -> None:
        """Test reset_instance starts a fresh registry."""
        first = get_metrics()
        first.passes.inc()
        MetricsRegistry.reset_instance()

        assert get_metrics() is not first
        assert get_metrics().passes.total() == 0

    def test_registry_has_expected_metrics(self) -> None:
        """Test metric names carry the livelint prefix."""
        registry = get_metrics()
        assert registry.passes.name == "livelint_passes_total"
        assert registry.pending_sessions.name == "livelint_pending_sessions"
        assert registry.pass_duration.name == "livelint_pass_duration_seconds"

    def test_registry_get_all_metrics(self) -> None:
        """Test the dictionary view groups metrics by concern."""
        registry = get_metrics()
        registry.passes.inc(labels={"profile": "python"})
        registry.diagnostics.inc(2, labels={"category": "Warning"})
        registry.corrections_offered.inc()
        registry.skipped_passes.inc()

        metrics = registry.get_all_metrics()

        assert metrics["passes"]["total"] == 1
        assert metrics["passes"]["by_profile"] == {"python": 1}
        assert metrics["passes"]["skipped_empty"] == 1
        assert metrics["diagnostics"] == {"Warning": 2}
        assert metrics["corrections"] == {"offered": 1, "applied": 0}
        assert metrics["uptime_seconds"] >= 0

    def test_registry_prometheus_format(self) -> None:
        """Test Prometheus text export."""
        registry = get_metrics()
        registry.passes.inc(labels={"profile": "generic"})
        registry.pass_duration.observe(0.001)

        output = registry.to_prometheus_format()

        assert "# TYPE livelint_passes_total counter" in output
        assert 'livelint_passes_total{profile="generic"} 1.0' in output
        assert "livelint_pass_duration_seconds_count 1" in output
        assert "livelint_uptime_seconds" in output


class TestTimer:
    """Tests for the Timer context manager."""

    def test_timer_records_duration(self) -> None:
        """Test the elapsed time is observed."""
        histogram = Histogram("duration")
        with Timer(histogram) as timer:
            time.sleep(0.01)

        assert timer.elapsed is not None
        assert timer.elapsed >= 0.01
        assert histogram.get_stats()["count"] == 1

    def test_timer_records_on_exception(self) -> None:
        """Test the duration is recorded even if the block raises."""
        histogram = Histogram("duration")
        with pytest.raises(RuntimeError), Timer(histogram, labels={"profile": "sql"}):
            raise RuntimeError("boom")

        assert histogram.get_stats({"profile": "sql"})["count"] == 1
