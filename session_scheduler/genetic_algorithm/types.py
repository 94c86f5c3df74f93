# session_scheduler/genetic_algorithm/types.py

"""
Result types reported by the generational driver.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np


@dataclass
class GenerationRecord:
    """What one generation produced, handed to on_generation observers"""

    generation: int
    best_index: int
    best_rating: float
    average_rating: float
    worst_rating: float
    order_penalty: int = 0
    oversubscribed_penalty: int = 0
    theme_penalty: int = 0
    priority_penalty: int = 0
    best_schedule: Optional[np.ndarray] = None


@dataclass
class EvolutionReport:
    """Outcome of a full genetic run"""

    success: bool = False
    best_rating: float = float("-inf")
    best_schedule: Optional[np.ndarray] = None
    generations_run: int = 0
    convergence_generation: Optional[int] = None
    total_time: float = 0.0
    phase_timings: Dict[str, Dict[str, float]] = field(default_factory=dict)
    logbook: Any = None

    @property
    def converged(self) -> bool:
        return self.convergence_generation is not None
