# session_scheduler/core/__init__.py

"""
Core data structures: schedule grids, random streams and the collaborator
interfaces the genetic algorithm consumes.
"""

from .collaborators import (
    PENALTY_NAMES,
    RatingBreakdown,
    RoomCatalog,
    Rooms,
    Session,
    SessionCatalog,
)
from .grid import (
    GRID_DTYPE,
    identity_grid,
    is_empty,
    is_session,
    random_grid,
    read_only_view,
)
from .random_pool import RandomStreamPool

__all__ = [
    "PENALTY_NAMES",
    "RatingBreakdown",
    "RoomCatalog",
    "Rooms",
    "Session",
    "SessionCatalog",
    "GRID_DTYPE",
    "identity_grid",
    "is_empty",
    "is_session",
    "random_grid",
    "read_only_view",
    "RandomStreamPool",
]
