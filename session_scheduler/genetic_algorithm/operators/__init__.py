# session_scheduler/genetic_algorithm/operators/__init__.py

"""
Genetic operators over permutation schedule grids.

Every operator works on one candidate at a time so the driver can map it over
the population in parallel, and every operator only moves values between
cells, never creating or dropping one.
"""

from .crossover import breed_child, breed_population, copy_elites, cycle_crossover
from .initialization import initialize_population, initialize_schedule
from .mutation import mutate_population, mutate_schedule
from .repair import fix_ordering, fix_population, fix_priority, fix_schedule
from .selection import (
    compute_selection_weights,
    compute_weights,
    rank_candidates,
    rank_population,
    roulette_draw,
    select_parent,
    select_parents,
)

__all__ = [
    # Crossover
    "breed_child",
    "breed_population",
    "copy_elites",
    "cycle_crossover",
    # Initialization
    "initialize_population",
    "initialize_schedule",
    # Mutation
    "mutate_population",
    "mutate_schedule",
    # Repair
    "fix_ordering",
    "fix_population",
    "fix_priority",
    "fix_schedule",
    # Selection
    "compute_selection_weights",
    "compute_weights",
    "rank_candidates",
    "rank_population",
    "roulette_draw",
    "select_parent",
    "select_parents",
]
