# session_scheduler/utils/__init__.py

from .performance import PhaseTimer
from .validation import (
    PermutationInvariantError,
    find_invalid_schedules,
    is_permutation_grid,
    validate_grid_dimensions,
    validate_run_parameters,
)

__all__ = [
    "PhaseTimer",
    "PermutationInvariantError",
    "find_invalid_schedules",
    "is_permutation_grid",
    "validate_grid_dimensions",
    "validate_run_parameters",
]
