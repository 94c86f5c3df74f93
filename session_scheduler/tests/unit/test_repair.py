# session_scheduler/tests/unit/test_repair.py
import numpy as np

from session_scheduler.core.random_pool import RandomStreamPool
from session_scheduler.genetic_algorithm.operators import (
    fix_ordering,
    fix_population,
    fix_priority,
    fix_schedule,
    initialize_population,
)
from session_scheduler.genetic_algorithm.population import PopulationStore
from session_scheduler.utils.validation import is_permutation_grid


def ordering_violations(schedule, catalog):
    n = catalog.size()
    cells = [(s, int(v)) for (s, _), v in np.ndenumerate(schedule) if v < n]
    return [
        (a, b)
        for slot_a, a in cells
        for slot_b, b in cells
        if slot_a < slot_b and catalog.breaks_ordering(a, b)
    ]


def priority_sorted(schedule, catalog):
    n = catalog.size()
    for row in schedule:
        values = [int(v) for v in row]
        occupied = [v for v in values if v < n]
        # Empty cells trail the occupied ones
        if values[: len(occupied)] != occupied:
            return False
        for first, second in zip(occupied, occupied[1:]):
            if catalog[second].higher_priority(catalog[first]):
                return False
    return True


class TestRepair:
    """Tests for the ordering and priority repair passes"""

    def test_ordering_swaps_parts_across_timeslots(self, small_catalog):
        schedule = np.array([[1, 4, 2], [0, 3, 5]])
        swaps = fix_ordering(schedule, small_catalog)
        assert swaps == 1
        assert schedule.tolist() == [[0, 4, 2], [1, 3, 5]]

    def test_ordering_ignores_same_timeslot(self, small_catalog):
        schedule = np.array([[1, 0, 2], [3, 4, 5]])
        assert fix_ordering(schedule, small_catalog) == 0
        assert schedule.tolist() == [[1, 0, 2], [3, 4, 5]]

    def test_priority_sorts_rooms_and_sinks_empty_cells(self, small_catalog):
        schedule = np.array([[0, 4, 2], [1, 3, 5]])
        swaps = fix_priority(schedule, small_catalog)
        assert swaps == 3
        assert schedule.tolist() == [[2, 0, 4], [3, 1, 5]]

    def test_fix_schedule_reaches_optimum(self, small_catalog):
        schedule = np.array([[1, 4, 2], [0, 3, 5]])
        assert fix_schedule(schedule, small_catalog) == 4
        assert schedule.tolist() == [[2, 0, 4], [3, 1, 5]]
        assert small_catalog.rate(schedule)[0] == 1.0

    def test_fix_keeps_permutation_and_satisfies_constraints(
        self, medium_catalog, make_grid
    ):
        for _ in range(50):
            schedule = make_grid(4, 3)
            fix_schedule(schedule, medium_catalog)
            assert is_permutation_grid(schedule)
            assert ordering_violations(schedule, medium_catalog) == []
            assert priority_sorted(schedule, medium_catalog)

    def test_fix_is_idempotent(self, medium_catalog, make_grid):
        for _ in range(50):
            schedule = make_grid(4, 3)
            fix_schedule(schedule, medium_catalog)
            repaired = schedule.copy()
            assert fix_schedule(schedule, medium_catalog) == 0
            np.testing.assert_array_equal(schedule, repaired)

    def test_fix_population(self, medium_catalog):
        store = PopulationStore(8, 4, 3)
        pool = RandomStreamPool(8, seed=42)
        initialize_population(store, pool)

        fix_population(store, medium_catalog)

        for index in range(store.size):
            assert is_permutation_grid(store.current[index])
            assert priority_sorted(store.current[index], medium_catalog)
        assert fix_population(store, medium_catalog) == 0

    def test_empty_cells_never_reach_the_catalog(
        self, medium_catalog, make_grid, monkeypatch
    ):
        size = medium_catalog.size()
        breaks_ordering = medium_catalog.breaks_ordering
        asked = []

        def checked_breaks_ordering(earlier_id, later_id):
            asked.append((earlier_id, later_id))
            assert earlier_id < size and later_id < size
            return breaks_ordering(earlier_id, later_id)

        monkeypatch.setattr(medium_catalog, "breaks_ordering", checked_breaks_ordering)
        for _ in range(20):
            schedule = make_grid(5, 3)
            fix_schedule(schedule, medium_catalog)
            assert is_permutation_grid(schedule)
        assert asked
