# session_scheduler/genetic_algorithm/population.py

"""
Population store for the schedule search.

Holds two generation buffers of shape (N, timeslots, rooms) plus the derived
per-candidate arrays. Breeding reads the current buffer and writes the next
one; swap() exchanges their roles, so a buffer is never overwritten while it
is still being read.
"""

import logging
from typing import Tuple

import numpy as np

from ..core.grid import GRID_DTYPE
from ..core.collaborators import PENALTY_NAMES

logger = logging.getLogger(__name__)


class PopulationStore:
    """Double-buffered candidate grids and their ratings, weights and ranking"""

    def __init__(
        self,
        population_size: int,
        num_timeslots: int,
        num_rooms: int,
        num_themes: int = 0,
    ):
        if population_size < 1:
            raise ValueError(f"Population size must be positive, got {population_size}")
        if num_timeslots < 1 or num_rooms < 1:
            raise ValueError(
                f"Grid must have at least one timeslot and one room, "
                f"got {num_timeslots}x{num_rooms}"
            )

        shape = (population_size, num_timeslots, num_rooms)
        self.current = np.zeros(shape, dtype=GRID_DTYPE)
        self.next = np.zeros(shape, dtype=GRID_DTYPE)

        self.ratings = np.zeros(population_size, dtype=np.float64)
        self.weights = np.zeros(population_size, dtype=np.float64)
        self.best_indices = np.arange(population_size, dtype=np.int64)
        self.penalties = np.zeros((population_size, len(PENALTY_NAMES)), dtype=np.int64)
        self.theme_penalties = np.zeros((population_size, num_themes), dtype=np.int64)

        self.best_rating = float("-inf")
        self.generation = 0

        logger.debug(
            f"Allocated population of {population_size} schedules "
            f"({num_timeslots} timeslots x {num_rooms} rooms)"
        )

    @property
    def size(self) -> int:
        return self.current.shape[0]

    @property
    def num_timeslots(self) -> int:
        return self.current.shape[1]

    @property
    def num_rooms(self) -> int:
        return self.current.shape[2]

    @property
    def grid_shape(self) -> Tuple[int, int]:
        return self.current.shape[1], self.current.shape[2]

    @property
    def num_cells(self) -> int:
        return self.num_timeslots * self.num_rooms

    @property
    def best_index(self) -> int:
        """Index into the current buffer of the top-ranked candidate"""
        return int(self.best_indices[0])

    def schedule(self, index: int) -> np.ndarray:
        """Writable view of a current-generation grid"""
        return self.current[index]

    def next_schedule(self, index: int) -> np.ndarray:
        """Writable view of a next-generation grid"""
        return self.next[index]

    def reset_derived(self) -> None:
        """Clear every array derived from ratings."""
        self.ratings.fill(0.0)
        self.weights.fill(0.0)
        self.best_indices[:] = np.arange(self.size)
        self.penalties.fill(0)
        self.theme_penalties.fill(0)
        self.best_rating = float("-inf")
        self.generation = 0

    def swap(self) -> None:
        """Make the next generation current."""
        self.current, self.next = self.next, self.current
        self.generation += 1
