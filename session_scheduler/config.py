# session_scheduler/config.py

"""
Configuration module for the session scheduler.
Holds the genetic algorithm parameters and the engine-wide logging settings.
"""

from typing import Optional
from dataclasses import dataclass, field
import logging

# Master seed used by the reference runs; any integer gives a reproducible run.
DEFAULT_SEED = 5374857


@dataclass
class GeneticAlgorithmConfig:
    """Configuration for the generational search"""

    population_size: int = 30
    elite_size: int = 2
    mutation_rate: float = 0.1
    generations: int = 100

    # Early exit once the best rating reaches max_rating (None disables it)
    max_rating: Optional[float] = 1.0
    rating_tolerance: float = 1e-9

    # Randomness and parallelism
    seed: Optional[int] = DEFAULT_SEED
    num_workers: Optional[int] = None
    pool_size: Optional[int] = None  # defaults to population_size

    # Diagnostics
    validate_generations: bool = False
    record_best_schedule: bool = False

    def validate(self) -> None:
        """Raise ValueError if the parameters cannot drive a run"""
        from .utils.validation import validate_run_parameters

        validate_run_parameters(
            self.population_size, self.elite_size, self.mutation_rate, self.generations
        )
        self.validate_execution()

    def validate_execution(self) -> None:
        """Check the settings every run uses, whatever its explicit arguments"""
        if self.rating_tolerance < 0:
            raise ValueError(
                f"rating_tolerance must be non-negative, got {self.rating_tolerance}"
            )
        if self.num_workers is not None and self.num_workers < 1:
            raise ValueError(f"num_workers must be positive, got {self.num_workers}")
        if self.pool_size is not None and self.pool_size < 1:
            raise ValueError(f"pool_size must be positive, got {self.pool_size}")


@dataclass
class SchedulingEngineConfig:
    """Main configuration for the session scheduler"""

    genetic_algorithm: GeneticAlgorithmConfig = field(
        default_factory=GeneticAlgorithmConfig
    )

    # Global settings
    enable_logging: bool = True
    log_level: str = "INFO"


# Global configuration instance
config = SchedulingEngineConfig()


def get_logger(name: str) -> logging.Logger:
    """Get configured logger for the session scheduler"""
    logger = logging.getLogger(f"session_scheduler.{name}")
    if config.enable_logging and not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, config.log_level))
    return logger
