# session_scheduler/tests/unit/test_validation.py
import numpy as np
import pytest

from session_scheduler.utils import (
    PermutationInvariantError,
    PhaseTimer,
    find_invalid_schedules,
    is_permutation_grid,
    validate_grid_dimensions,
    validate_run_parameters,
)


class TestGridValidation:
    """Tests for grid checks"""

    def test_permutation_grid(self):
        assert is_permutation_grid(np.array([[3, 0], [2, 1]]))

    @pytest.mark.parametrize(
        "grid",
        [
            [[0, 0], [2, 1]],  # duplicate
            [[0, 4], [2, 1]],  # out of range
            [[0, -1], [2, 1]],  # negative
        ],
    )
    def test_not_permutation_grid(self, grid):
        assert not is_permutation_grid(np.array(grid))

    def test_find_invalid_schedules(self):
        schedules = np.array([[[0, 1], [2, 3]], [[1, 1], [2, 3]], [[3, 2], [1, 0]]])
        assert find_invalid_schedules(schedules) == [1]

    def test_invariant_error_message(self):
        error = PermutationInvariantError([2, 5], phase="mutation")
        assert error.invalid_indices == [2, 5]
        assert "after mutation" in str(error)

    def test_grid_dimensions(self):
        validate_grid_dimensions(2, 3, 6)
        with pytest.raises(ValueError):
            validate_grid_dimensions(0, 3, 0)
        with pytest.raises(ValueError):
            validate_grid_dimensions(2, 0, 0)
        with pytest.raises(ValueError):
            validate_grid_dimensions(2, 3, 7)


class TestRunParameterValidation:
    """Tests for run parameter checks"""

    def test_valid_parameters(self):
        validate_run_parameters(30, 2, 0.1, 100)
        validate_run_parameters(1, 1, 0.0, 0)

    @pytest.mark.parametrize(
        "params",
        [
            (0, 0, 0.1, 10),
            (10, -1, 0.1, 10),
            (10, 11, 0.1, 10),
            (1, 0, 0.1, 10),
            (10, 2, 1.5, 10),
            (10, 2, -0.1, 10),
            (10, 2, 0.1, -1),
        ],
    )
    def test_invalid_parameters(self, params):
        with pytest.raises(ValueError):
            validate_run_parameters(*params)


class TestPhaseTimer:
    """Tests for per-phase timing"""

    def test_accumulates_per_phase(self):
        timer = PhaseTimer()
        for _ in range(3):
            with timer.phase("rate"):
                pass
        with timer.phase("fix"):
            pass

        assert timer.count("rate") == 3
        assert timer.count("fix") == 1
        assert timer.count("mutate") == 0
        summary = timer.summary()
        assert summary["rate"]["count"] == 3
        assert summary["rate"]["total_seconds"] >= 0.0

    def test_records_on_error(self):
        timer = PhaseTimer()
        with pytest.raises(RuntimeError):
            with timer.phase("breed"):
                raise RuntimeError("boom")
        assert timer.count("breed") == 1

        timer.reset()
        assert timer.summary() == {}
