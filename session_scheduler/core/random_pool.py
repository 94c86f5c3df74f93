# session_scheduler/core/random_pool.py

"""
Pool of independently seeded random generators.

Each stream is spawned from one master seed, so stream k depends only on the
master seed and k. Tasks check a stream out for the duration of their draws;
checkout is exclusive, so no generator is ever used by two threads at once.
When the pool holds at least one stream per candidate, every candidate task
gets its own stream and a run is reproducible whatever order the worker
threads execute in.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional

import numpy as np

logger = logging.getLogger(__name__)


class RandomStreamPool:
    """Checkout/check-in access to a fixed set of numpy generators"""

    def __init__(self, size: int, seed: Optional[int] = None):
        if size < 1:
            raise ValueError(f"Random stream pool size must be positive, got {size}")
        self._locks: List[threading.Lock] = [threading.Lock() for _ in range(size)]
        self._generators: List[np.random.Generator] = []
        self.reseed(seed)

    def __len__(self) -> int:
        return len(self._generators)

    def reseed(self, seed: Optional[int]) -> None:
        """Respawn every stream from a new master seed."""
        self.seed = seed
        children = np.random.SeedSequence(seed).spawn(len(self._locks))
        self._generators = [np.random.default_rng(child) for child in children]
        logger.debug(f"Spawned {len(self._generators)} random streams from seed {seed}")

    @contextmanager
    def checkout(self, task_index: int) -> Iterator[np.random.Generator]:
        """Hold the stream assigned to task_index until the block exits."""
        slot = task_index % len(self._generators)
        with self._locks[slot]:
            yield self._generators[slot]
