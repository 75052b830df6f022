"""
Performance measurement utilities.

Provides a decorator and a context manager for timing functions and code
blocks, with per-frame aggregation and a text report. Tracking is disabled by
default and costs a single attribute check per call while off.

Usage Examples:
    enable_performance_tracking()

    @measure("visibility_field")
    def compute_visibility_field(...):
        ...

    with measure_block("render"):
        draw_frame(...)

    start_frame()
    # ... one input/recompute/render cycle ...
    end_frame()

    print(get_performance_report())
"""

import functools
import time
from collections import defaultdict, deque
from collections.abc import Callable
from contextlib import contextmanager
from dataclasses import dataclass, field


@dataclass
class PerformanceStats:
    """Statistics for a measured operation."""

    name: str
    call_count: int = 0
    total_time: float = 0.0
    min_time: float = float("inf")
    max_time: float = 0.0
    recent_times: deque = field(default_factory=lambda: deque(maxlen=100))

    def add_measurement(self, duration: float) -> None:
        self.call_count += 1
        self.total_time += duration
        self.min_time = min(self.min_time, duration)
        self.max_time = max(self.max_time, duration)
        self.recent_times.append(duration)

    @property
    def avg_time(self) -> float:
        return self.total_time / self.call_count if self.call_count > 0 else 0.0

    @property
    def recent_avg_time(self) -> float:
        """Average of the last 100 measurements."""
        if not self.recent_times:
            return 0.0
        return sum(self.recent_times) / len(self.recent_times)


class PerformanceTracker:
    """Collects timing statistics for named operations."""

    def __init__(self) -> None:
        self.stats: dict[str, PerformanceStats] = {}
        self.enabled = False
        self.frame_start_time: float | None = None
        self.frame_stats: dict[str, float] = defaultdict(float)

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def reset(self) -> None:
        self.stats.clear()
        self.frame_stats.clear()

    def _record(self, name: str, duration: float) -> None:
        if name not in self.stats:
            self.stats[name] = PerformanceStats(name)
        self.stats[name].add_measurement(duration)
        self.frame_stats[name] += duration

    def start_frame(self) -> None:
        """Mark the start of a frame; one frame is one recompute-and-render turn."""
        self.frame_start_time = time.perf_counter()
        self.frame_stats.clear()

    def end_frame(self) -> None:
        if not self.enabled or self.frame_start_time is None:
            return
        frame_duration = time.perf_counter() - self.frame_start_time
        if "frame_total" not in self.stats:
            self.stats["frame_total"] = PerformanceStats("frame_total")
        self.stats["frame_total"].add_measurement(frame_duration)

    def measure(self, name: str):
        """Decorator timing every call of the wrapped function under ``name``.

        If the same name is used for several functions their statistics are
        combined.
        """

        def decorator(func: Callable) -> Callable:
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                if not self.enabled:
                    return func(*args, **kwargs)

                start_time = time.perf_counter()
                try:
                    return func(*args, **kwargs)
                finally:
                    self._record(name, time.perf_counter() - start_time)

            return wrapper

        return decorator

    @contextmanager
    def measure_block(self, name: str):
        """Context manager timing the enclosed block under ``name``."""
        if not self.enabled:
            yield
            return

        start_time = time.perf_counter()
        try:
            yield
        finally:
            self._record(name, time.perf_counter() - start_time)

    def get_stats(self, name: str) -> PerformanceStats | None:
        return self.stats.get(name)

    def get_frame_time(self, name: str) -> float:
        """Seconds spent in ``name`` during the current frame."""
        return self.frame_stats.get(name, 0.0)

    def get_report(self, sort_by: str = "total_time") -> str:
        """Format the collected statistics as a table.

        Args:
            sort_by: 'total_time', 'avg_time', 'call_count' or 'name'.
        """
        if not self.stats:
            return "No performance data collected."

        reverse = sort_by != "name"
        try:
            sorted_stats = sorted(
                self.stats.values(), key=lambda s: getattr(s, sort_by), reverse=reverse
            )
        except AttributeError:
            sorted_stats = sorted(
                self.stats.values(), key=lambda s: s.total_time, reverse=True
            )

        title = "Performance Report"
        lines = [title, "=" * len(title)]
        lines.append(
            f"{'Name':<25} {'Calls':<8} {'Total(ms)':<10} "
            f"{'Avg(µs)':<10} {'Recent(µs)':<12}"
        )
        lines.append("-" * 75)
        lines.extend(
            f"{stat.name:<25} "
            f"{stat.call_count:<8} "
            f"{stat.total_time * 1000:<10.2f} "
            f"{stat.avg_time * 1000000:<10.1f} "
            f"{stat.recent_avg_time * 1000000:<12.1f}"
            for stat in sorted_stats
        )

        return "\n".join(lines)


# Global performance tracker instance
perf_tracker = PerformanceTracker()


def enable_performance_tracking() -> None:
    perf_tracker.enable()


def disable_performance_tracking() -> None:
    perf_tracker.disable()


def reset_performance_data() -> None:
    perf_tracker.reset()


def measure(name: str):
    """See PerformanceTracker.measure()."""
    return perf_tracker.measure(name)


def measure_block(name: str):
    """See PerformanceTracker.measure_block()."""
    return perf_tracker.measure_block(name)


def start_frame() -> None:
    perf_tracker.start_frame()


def end_frame() -> None:
    perf_tracker.end_frame()


def get_performance_report(sort_by: str = "total_time") -> str:
    return perf_tracker.get_report(sort_by)
