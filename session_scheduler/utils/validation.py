# session_scheduler/utils/validation.py

"""
Validation utilities for the session scheduler.
Checks caller input before a run starts and verifies the permutation
invariant of schedule grids.
"""

import logging
from typing import List

import numpy as np

logger = logging.getLogger(__name__)


class PermutationInvariantError(RuntimeError):
    """Raised when a schedule grid is no longer a permutation of its cell ids"""

    def __init__(self, invalid_indices: List[int], phase: str = ""):
        self.invalid_indices = list(invalid_indices)
        self.phase = phase
        where = f" after {phase}" if phase else ""
        super().__init__(
            f"{len(self.invalid_indices)} schedule(s) broke the permutation "
            f"invariant{where}: {self.invalid_indices}"
        )


def validate_grid_dimensions(num_timeslots: int, num_rooms: int, num_sessions: int) -> None:
    """Validate grid shape against the number of sessions to place."""
    if num_timeslots < 1:
        raise ValueError(f"Number of timeslots must be positive, got {num_timeslots}")
    if num_rooms < 1:
        raise ValueError(f"Number of rooms must be positive, got {num_rooms}")
    if num_sessions < 0:
        raise ValueError(f"Number of sessions cannot be negative, got {num_sessions}")
    if num_timeslots * num_rooms < num_sessions:
        raise ValueError(
            f"Grid of {num_timeslots} timeslots x {num_rooms} rooms has "
            f"{num_timeslots * num_rooms} cells but {num_sessions} sessions must be placed"
        )


def validate_run_parameters(
    population_size: int, elite_size: int, mutation_rate: float, generations: int
) -> None:
    """Validate the parameters of a generational run."""
    if population_size < 1:
        raise ValueError(f"Population size must be positive, got {population_size}")
    if elite_size < 0:
        raise ValueError(f"Elite size cannot be negative, got {elite_size}")
    if elite_size > population_size:
        raise ValueError(
            f"Elite size ({elite_size}) cannot exceed population size ({population_size})"
        )
    if elite_size < population_size and population_size < 2:
        raise ValueError(
            "Breeding needs two distinct parents; use a population of at least 2 "
            "or make every candidate elite"
        )
    if not 0.0 <= mutation_rate <= 1.0:
        raise ValueError(f"Mutation rate must lie in [0, 1], got {mutation_rate}")
    if generations < 0:
        raise ValueError(f"Generation budget cannot be negative, got {generations}")


def is_permutation_grid(grid: np.ndarray) -> bool:
    """True if every id in [0, grid.size) appears exactly once in grid."""
    values = np.asarray(grid).ravel()
    if values.size == 0:
        return True
    if values.min() < 0 or values.max() >= values.size:
        return False
    return bool(np.all(np.bincount(values, minlength=values.size) == 1))


def find_invalid_schedules(schedules: np.ndarray) -> List[int]:
    """Return the indices of the schedules in a population buffer that are not permutations."""
    invalid = [i for i in range(schedules.shape[0]) if not is_permutation_grid(schedules[i])]
    for index in invalid:
        logger.error(f"Schedule {index} does not contain every cell id exactly once")
    return invalid
