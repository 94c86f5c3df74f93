# session_scheduler/core/grid.py

"""
Grid representation for conference schedules.

A schedule is a 2-D integer array of shape (timeslots, rooms). Each cell holds
one identifier from [0, timeslots * rooms). Identifiers below the number of
sessions name real sessions; the remaining ones are distinct "empty"
placeholders, so a full grid is always a permutation of its cell ids.
"""

from typing import Iterator, Tuple

import numpy as np

GRID_DTYPE = np.int64


def num_cells(num_timeslots: int, num_rooms: int) -> int:
    return num_timeslots * num_rooms


def is_session(value: int, num_sessions: int) -> bool:
    """True if value names a real session rather than an empty placeholder."""
    return value < num_sessions


def is_empty(value: int, num_sessions: int) -> bool:
    return value >= num_sessions


def identity_grid(num_timeslots: int, num_rooms: int) -> np.ndarray:
    """Grid holding 0..cells-1 in row-major order."""
    return np.arange(
        num_cells(num_timeslots, num_rooms), dtype=GRID_DTYPE
    ).reshape(num_timeslots, num_rooms)


def random_grid(num_timeslots: int, num_rooms: int, rng: np.random.Generator) -> np.ndarray:
    """Uniformly random permutation grid."""
    cells = num_cells(num_timeslots, num_rooms)
    return rng.permutation(cells).astype(GRID_DTYPE).reshape(num_timeslots, num_rooms)


def iter_cells(grid: np.ndarray) -> Iterator[Tuple[int, int]]:
    """Yield (timeslot, room) positions in row-major order."""
    num_timeslots, num_rooms = grid.shape
    for slot in range(num_timeslots):
        for room in range(num_rooms):
            yield slot, room


def swap_cells(grid: np.ndarray, a: Tuple[int, int], b: Tuple[int, int]) -> None:
    """Swap the contents of two cells in place."""
    grid[a], grid[b] = grid[b], grid[a]


def read_only_view(grid: np.ndarray) -> np.ndarray:
    """View of grid that refuses writes; the underlying buffer is untouched."""
    view = grid.view()
    view.flags.writeable = False
    return view
