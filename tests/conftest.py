from __future__ import annotations

from collections.abc import Iterator

import pytest

from sightline.util.performance import perf_tracker


@pytest.fixture(autouse=True)
def reset_performance_tracker() -> Iterator[None]:
    """Leave the global performance tracker disabled and empty around each test."""
    perf_tracker.disable()
    perf_tracker.reset()
    yield
    perf_tracker.disable()
    perf_tracker.reset()
