from __future__ import annotations

import pytest

from sightline.util.performance import PerformanceTracker


def test_disabled_tracker_records_nothing() -> None:
    tracker = PerformanceTracker()

    @tracker.measure("noop")
    def noop() -> int:
        return 42

    assert noop() == 42
    with tracker.measure_block("block"):
        pass

    assert tracker.stats == {}
    assert tracker.get_report() == "No performance data collected."


def test_measure_decorator_counts_calls() -> None:
    tracker = PerformanceTracker()
    tracker.enable()

    @tracker.measure("work")
    def work(n: int) -> int:
        return sum(range(n))

    for _ in range(3):
        work(100)

    stats = tracker.get_stats("work")
    assert stats is not None
    assert stats.call_count == 3
    assert stats.min_time <= stats.avg_time <= stats.max_time


def test_measure_records_even_when_function_raises() -> None:
    tracker = PerformanceTracker()
    tracker.enable()

    @tracker.measure("boom")
    def boom() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        boom()

    stats = tracker.get_stats("boom")
    assert stats is not None and stats.call_count == 1


def test_frame_tracking_and_report() -> None:
    tracker = PerformanceTracker()
    tracker.enable()

    tracker.start_frame()
    with tracker.measure_block("render"):
        pass
    assert tracker.get_frame_time("render") >= 0.0
    tracker.end_frame()

    frame = tracker.get_stats("frame_total")
    assert frame is not None and frame.call_count == 1

    report = tracker.get_report(sort_by="name")
    assert "render" in report
    assert "frame_total" in report
