# session_scheduler/genetic_algorithm/__init__.py
"""
Genetic algorithm over (timeslot x room) permutation grids.

Key components:
- SessionScheduler: the generational driver.
- PopulationStore: double-buffered candidate grids with ratings and ranking.
- operators: initialization, repair, selection, crossover and mutation.
"""

from .evolution_manager import SessionScheduler, create_session_scheduler
from .population import PopulationStore
from .types import EvolutionReport, GenerationRecord

__all__ = [
    "SessionScheduler",
    "create_session_scheduler",
    "PopulationStore",
    "EvolutionReport",
    "GenerationRecord",
]
