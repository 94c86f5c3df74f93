# session_scheduler/__init__.py

"""
Session Scheduler Package Initialization

Assigns conference sessions (e.g. minisymposium parts) to a grid of timeslots
and rooms with a genetic algorithm. Scoring and the ordering/priority rules
come from a caller-supplied SessionCatalog.
"""

from .config import (
    GeneticAlgorithmConfig,
    SchedulingEngineConfig,
    config,
    get_logger,
)

from .core import (
    RatingBreakdown,
    RandomStreamPool,
    RoomCatalog,
    Rooms,
    Session,
    SessionCatalog,
)
from .export import ReportBuilder
from .genetic_algorithm import (
    EvolutionReport,
    GenerationRecord,
    PopulationStore,
    SessionScheduler,
    create_session_scheduler,
)
from .utils import PermutationInvariantError

__version__ = "1.0.0"

# Package-level exports
__all__ = [
    # Configuration
    "GeneticAlgorithmConfig",
    "SchedulingEngineConfig",
    "config",
    "get_logger",
    # Collaborator interfaces
    "RatingBreakdown",
    "RandomStreamPool",
    "RoomCatalog",
    "Rooms",
    "Session",
    "SessionCatalog",
    # Engine
    "EvolutionReport",
    "GenerationRecord",
    "PopulationStore",
    "SessionScheduler",
    "create_session_scheduler",
    "ReportBuilder",
    "PermutationInvariantError",
]

# Initialize package-level logger
logger = get_logger("main")
logger.debug(f"Session Scheduler v{__version__} initialized")
