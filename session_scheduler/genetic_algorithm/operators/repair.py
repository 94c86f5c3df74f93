# session_scheduler/genetic_algorithm/operators/repair.py

"""
Repair ("fix") pass restoring the structural constraints of a schedule.

Two passes, both made only of cell swaps so the permutation invariant is
untouched:

1. Ordering: every pair of occupied cells in different timeslots is checked
   with the catalog's breaks_ordering, and swapped when the earlier cell holds
   a session that must come after the later one. All pairs are visited, not
   only adjacent ones.
2. Priority: inside each timeslot the sessions are bubble-sorted across rooms
   by descending priority, with empty cells sinking to the last rooms.

Crossover and mutation can break both constraints again, so the pass runs on
every generation. The pairwise scan costs O(slots^2 * rooms^2) per schedule,
which is fine at conference scale.
"""

import logging
from functools import partial
from typing import Callable

import numpy as np

from ...core.collaborators import SessionCatalog
from ...core.grid import is_empty, iter_cells, swap_cells
from ..population import PopulationStore

logger = logging.getLogger(__name__)


def fix_ordering(schedule: np.ndarray, sessions: SessionCatalog) -> int:
    """Apply the ordering pass in place; returns the number of swaps."""
    num_sessions = sessions.size()
    num_timeslots, num_rooms = schedule.shape
    swaps = 0

    for slot1, room1 in iter_cells(schedule):
        if is_empty(schedule[slot1, room1], num_sessions):
            continue
        for slot2 in range(slot1 + 1, num_timeslots):
            for room2 in range(num_rooms):
                later = int(schedule[slot2, room2])
                if is_empty(later, num_sessions):
                    continue
                earlier = int(schedule[slot1, room1])
                if sessions.breaks_ordering(earlier, later):
                    swap_cells(schedule, (slot1, room1), (slot2, room2))
                    swaps += 1
    return swaps


def fix_priority(schedule: np.ndarray, sessions: SessionCatalog) -> int:
    """Apply the per-timeslot priority pass in place; returns the number of swaps."""
    num_sessions = sessions.size()
    num_timeslots, num_rooms = schedule.shape
    swaps = 0

    for slot in range(num_timeslots):
        row = schedule[slot]
        for i in range(1, num_rooms):
            for j in range(num_rooms - i):
                first = int(row[j])
                second = int(row[j + 1])
                if is_empty(second, num_sessions):
                    continue
                if is_empty(first, num_sessions) or sessions[second].higher_priority(
                    sessions[first]
                ):
                    row[j] = second
                    row[j + 1] = first
                    swaps += 1
    return swaps


def fix_schedule(schedule: np.ndarray, sessions: SessionCatalog) -> int:
    """Run both repair passes on one schedule in place."""
    return fix_ordering(schedule, sessions) + fix_priority(schedule, sessions)


def _fix_candidate(store: PopulationStore, sessions: SessionCatalog, index: int) -> int:
    return fix_schedule(store.current[index], sessions)


def fix_population(
    store: PopulationStore, sessions: SessionCatalog, map_fn: Callable = map
) -> int:
    """Repair every current schedule; returns the total number of swaps."""
    swaps = sum(map_fn(partial(_fix_candidate, store, sessions), range(store.size)))
    logger.debug(f"Repair pass made {swaps} swaps across {store.size} schedules")
    return swaps
