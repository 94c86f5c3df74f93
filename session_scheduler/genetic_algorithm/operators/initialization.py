# session_scheduler/genetic_algorithm/operators/initialization.py

"""
Initial population: independent uniformly random permutation grids.
"""

import logging
from functools import partial
from typing import Callable

from ...core.grid import random_grid
from ...core.random_pool import RandomStreamPool
from ..population import PopulationStore

logger = logging.getLogger(__name__)


def initialize_schedule(store: PopulationStore, pool: RandomStreamPool, index: int) -> None:
    """Fill current schedule `index` with a fresh random permutation."""
    with pool.checkout(index) as rng:
        grid = random_grid(store.num_timeslots, store.num_rooms, rng)
    store.current[index] = grid


def initialize_population(
    store: PopulationStore, pool: RandomStreamPool, map_fn: Callable = map
) -> None:
    """Reset the derived buffers and randomize every current schedule."""
    store.reset_derived()
    list(map_fn(partial(initialize_schedule, store, pool), range(store.size)))
    logger.debug(f"Initialized {store.size} random schedules")
