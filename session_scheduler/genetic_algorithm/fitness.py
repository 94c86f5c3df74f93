# session_scheduler/genetic_algorithm/fitness.py

"""
Fitness phase: rate every candidate through the session catalog.

Rating is a barrier. Every rating is stored before the ranking is refreshed,
because selection weights and elitism need the whole population's scores.
"""

import logging
from functools import partial
from typing import Callable

from ..core.collaborators import RatingBreakdown, SessionCatalog
from .operators.selection import rank_population
from .population import PopulationStore

logger = logging.getLogger(__name__)


def rate_schedule(
    store: PopulationStore, sessions: SessionCatalog, index: int
) -> RatingBreakdown:
    """Rate current schedule `index` and record the result in the store."""
    theme_penalties = store.theme_penalties[index]
    theme_penalties.fill(0)
    breakdown = RatingBreakdown(*sessions.rate(store.current[index], theme_penalties))

    store.ratings[index] = breakdown.rating
    store.penalties[index] = breakdown.penalties
    return breakdown


def rate_population(
    store: PopulationStore, sessions: SessionCatalog, map_fn: Callable = map
) -> float:
    """Rate every current schedule, rank them, and return the best rating."""
    list(map_fn(partial(rate_schedule, store, sessions), range(store.size)))
    best_rating = rank_population(store)
    logger.debug(
        f"Rated {store.size} schedules; best={best_rating:.6f} "
        f"(schedule {store.best_index})"
    )
    return best_rating


def best_breakdown(store: PopulationStore) -> RatingBreakdown:
    """Rating and penalty breakdown of the top-ranked candidate."""
    index = store.best_index
    order, oversubscribed, theme, priority = (int(p) for p in store.penalties[index])
    return RatingBreakdown(
        float(store.ratings[index]), order, oversubscribed, theme, priority
    )
