# session_scheduler/genetic_algorithm/operators/crossover.py

"""
Cycle-resolution crossover for permutation grids.

The child takes timeslots [0, cut) from the first parent unchanged. Every
remaining cell starts from the second parent's value at that cell. If that
value already sits in the copied block, the search jumps to the cell where the
first parent holds it and takes the second parent's value there, repeating
until it lands on a value outside the copied block.

Why it terminates and yields a permutation: let f map a position p to the
position where the first parent's copied block holds dad[p]. Both parents are
bijections, so f is injective. A chain starts outside the block and every
later step is inside it, so a repeat would need two distinct predecessors of
one position, or a return to the outside start; neither is possible. The chain
therefore ends within cut * rooms steps. Two different start cells cannot end
on the same value for the same reason, and the values outside the block number
exactly the cells left to fill.
"""

import logging
from functools import partial
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from ...core.random_pool import RandomStreamPool
from ..population import PopulationStore
from .selection import select_parents

logger = logging.getLogger(__name__)


def cycle_crossover(
    mom: np.ndarray, dad: np.ndarray, cut: int, child: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    Breed one child grid from two permutation grids.

    Args:
        mom: Parent whose timeslots [0, cut) are copied verbatim.
        dad: Parent supplying the remaining cells.
        cut: Number of leading timeslots taken from mom, in [0, timeslots].
        child: Optional output array of the same shape, written in place.

    Returns:
        The child grid.
    """
    if mom.shape != dad.shape:
        raise ValueError(f"Parent shapes differ: {mom.shape} vs {dad.shape}")
    num_timeslots, num_rooms = mom.shape
    if not 0 <= cut <= num_timeslots:
        raise ValueError(f"Cut {cut} outside [0, {num_timeslots}]")

    if child is None:
        child = np.empty_like(mom)
    child[:cut] = mom[:cut]

    copied: Dict[int, Tuple[int, int]] = {
        int(mom[slot, room]): (slot, room)
        for slot in range(cut)
        for room in range(num_rooms)
    }

    for slot in range(cut, num_timeslots):
        for room in range(num_rooms):
            value = int(dad[slot, room])
            while value in copied:
                value = int(dad[copied[value]])
            child[slot, room] = value
    return child


def copy_elites(store: PopulationStore, elite_size: int) -> None:
    """Copy the top-ranked candidates into the first next-generation slots."""
    for rank in range(elite_size):
        store.next[rank] = store.current[store.best_indices[rank]]


def breed_child(
    store: PopulationStore, pool: RandomStreamPool, child_index: int
) -> Tuple[int, int, int]:
    """
    Fill next-generation slot `child_index` from two roulette-selected parents.

    Returns:
        (mom_index, dad_index, cut)
    """
    with pool.checkout(child_index) as rng:
        mom_index, dad_index = select_parents(store.weights, rng)
        cut = int(rng.integers(0, store.num_timeslots))

    cycle_crossover(
        store.current[mom_index],
        store.current[dad_index],
        cut,
        child=store.next[child_index],
    )
    return mom_index, dad_index, cut


def breed_population(
    store: PopulationStore,
    pool: RandomStreamPool,
    elite_size: int,
    map_fn: Callable = map,
) -> None:
    """Write a complete next generation: elites first, then bred children."""
    copy_elites(store, elite_size)
    list(map_fn(partial(breed_child, store, pool), range(elite_size, store.size)))
    logger.debug(
        f"Bred {store.size - elite_size} children and kept {elite_size} elites"
    )
