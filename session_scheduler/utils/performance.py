# session_scheduler/utils/performance.py

"""
Phase timing for the generational loop.
"""

import time
import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, List, Iterator


class PhaseTimer:
    """Accumulates wall-clock durations per named phase."""

    def __init__(self):
        self._durations: Dict[str, List[float]] = defaultdict(list)
        self._lock = threading.Lock()

    @contextmanager
    def phase(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            with self._lock:
                self._durations[name].append(elapsed)

    def total(self, name: str) -> float:
        with self._lock:
            return sum(self._durations.get(name, []))

    def count(self, name: str) -> int:
        with self._lock:
            return len(self._durations.get(name, []))

    def summary(self) -> Dict[str, Dict[str, float]]:
        """Per-phase call count, total and mean duration in seconds"""
        with self._lock:
            return {
                name: {
                    "count": len(values),
                    "total_seconds": sum(values),
                    "mean_seconds": sum(values) / len(values) if values else 0.0,
                }
                for name, values in self._durations.items()
            }

    def reset(self) -> None:
        with self._lock:
            self._durations.clear()
