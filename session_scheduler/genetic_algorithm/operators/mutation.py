# session_scheduler/genetic_algorithm/operators/mutation.py

"""
Slot-swap mutation.

Each cell, with the given probability, trades places with the cell in the same
room at another timeslot of the same schedule. A pure swap keeps the grid a
permutation. The schedule at next-generation index 0 is the champion copied by
elitism and is never mutated.
"""

import logging
from functools import partial
from typing import Callable

import numpy as np

from ...core.grid import swap_cells
from ...core.random_pool import RandomStreamPool
from ..population import PopulationStore

logger = logging.getLogger(__name__)


def mutate_schedule(
    schedule: np.ndarray, mutation_rate: float, rng: np.random.Generator
) -> int:
    """Mutate one schedule in place; returns the number of swaps."""
    num_timeslots, num_rooms = schedule.shape
    if num_timeslots < 2 or mutation_rate <= 0.0:
        return 0

    swaps = 0
    for slot in range(num_timeslots):
        for room in range(num_rooms):
            if rng.random() >= mutation_rate:
                continue
            # uniform over the other timeslots
            other = int(rng.integers(0, num_timeslots - 1))
            if other >= slot:
                other += 1
            swap_cells(schedule, (slot, room), (other, room))
            swaps += 1
    return swaps


def _mutate_candidate(
    store: PopulationStore, pool: RandomStreamPool, mutation_rate: float, index: int
) -> int:
    with pool.checkout(index) as rng:
        return mutate_schedule(store.next[index], mutation_rate, rng)


def mutate_population(
    store: PopulationStore,
    pool: RandomStreamPool,
    mutation_rate: float,
    map_fn: Callable = map,
) -> int:
    """Mutate every next-generation schedule except the champion at index 0."""
    swaps = sum(
        map_fn(
            partial(_mutate_candidate, store, pool, mutation_rate),
            range(1, store.size),
        )
    )
    logger.debug(f"Mutation made {swaps} swaps")
    return swaps
