# session_scheduler/genetic_algorithm/operators/selection.py

"""
Ranking and roulette-wheel parent selection.

Candidates are ranked by descending rating. Selection weights are the ratings
shifted so the worst candidate weighs zero, then normalized to sum to 1. A
parent is drawn by spinning r in [0, 1) and walking the cumulative weights.
"""

import logging
from typing import Tuple

import numpy as np

from ..population import PopulationStore

logger = logging.getLogger(__name__)


def rank_candidates(ratings: np.ndarray) -> np.ndarray:
    """Indices ordered by descending rating; ties keep the lower index first."""
    return np.argsort(-np.asarray(ratings, dtype=np.float64), kind="stable")


def rank_population(store: PopulationStore) -> float:
    """Refresh the best-index ranking and return the best rating."""
    store.best_indices[:] = rank_candidates(store.ratings)
    store.best_rating = float(store.ratings[store.best_indices[0]])
    return store.best_rating


def compute_selection_weights(ratings: np.ndarray) -> np.ndarray:
    """
    Normalized roulette weights for a set of ratings.

    weight[i] = rating[i] - min(rating), scaled to sum to 1. When every
    candidate has the same rating the shifted weights are all zero and the
    distribution falls back to uniform.
    """
    ratings = np.asarray(ratings, dtype=np.float64)
    if ratings.size == 0:
        return ratings.copy()

    shifted = ratings - ratings.min()
    total = shifted.sum()
    if not np.isfinite(total) or total <= 0.0:
        return np.full(ratings.size, 1.0 / ratings.size)
    return shifted / total


def compute_weights(store: PopulationStore) -> np.ndarray:
    store.weights[:] = compute_selection_weights(store.ratings)
    return store.weights


def roulette_draw(weights: np.ndarray, r: float) -> int:
    """
    First index whose running weight sum exceeds r.

    If rounding leaves the total just below r, the last candidate is chosen.
    """
    running = 0.0
    for index, weight in enumerate(weights):
        running += weight
        if r < running:
            return index
    return len(weights) - 1


def select_parent(weights: np.ndarray, rng: np.random.Generator) -> int:
    return roulette_draw(weights, rng.random())


def select_parents(weights: np.ndarray, rng: np.random.Generator) -> Tuple[int, int]:
    """
    Draw two distinct parents.

    The second draw is conditioned on differing from the first, which is the
    distribution of redrawing until it differs. Drawing from the remaining
    mass directly never spins when the first parent holds all of it; in that
    case the second parent is uniform over the others.
    """
    count = len(weights)
    if count < 2:
        raise ValueError("Selecting two distinct parents needs at least two candidates")

    first = select_parent(weights, rng)

    remaining = np.array(weights, dtype=np.float64)
    remaining[first] = 0.0
    total = remaining.sum()
    second = first
    if total > 0.0:
        second = roulette_draw(remaining / total, rng.random())
    if second == first:
        second = int(rng.integers(0, count - 1))
        if second >= first:
            second += 1
    return first, second
