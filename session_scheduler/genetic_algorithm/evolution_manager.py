"""
Generational driver for the conference session scheduler.

Runs Init -> Fix -> (Rate -> [stop at optimum] -> Select -> Breed -> Mutate ->
Swap -> Fix)* over a double-buffered population. Every phase is mapped over
the candidates through the DEAP toolbox `map`, bound to a thread pool for the
length of a run, and fully materialized before the next phase starts.
"""

import logging
import time
from dataclasses import replace
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Union

import numpy as np
from deap import base, tools

from ..config import GeneticAlgorithmConfig, config
from ..core.collaborators import RoomCatalog, SessionCatalog
from ..core.grid import read_only_view
from ..core.random_pool import RandomStreamPool
from ..export.report_builder import ReportBuilder, ReportFormat
from ..utils.performance import PhaseTimer
from ..utils.validation import (
    PermutationInvariantError,
    find_invalid_schedules,
    validate_grid_dimensions,
    validate_run_parameters,
)
from .fitness import best_breakdown, rate_population
from .operators import (
    breed_population,
    compute_weights,
    fix_population,
    initialize_population,
    mutate_population,
)
from .population import PopulationStore
from .types import EvolutionReport, GenerationRecord

logger = logging.getLogger(__name__)

GenerationCallback = Callable[[GenerationRecord], None]


class SessionScheduler:
    """Assigns sessions to (timeslot, room) cells with a genetic algorithm."""

    def __init__(
        self,
        sessions: SessionCatalog,
        rooms: RoomCatalog,
        num_timeslots: int,
        parameters: Optional[GeneticAlgorithmConfig] = None,
        on_generation: Optional[GenerationCallback] = None,
    ):
        validate_grid_dimensions(num_timeslots, rooms.size(), sessions.size())

        self.sessions = sessions
        self.rooms = rooms
        self.num_timeslots = num_timeslots
        self.parameters = parameters or replace(config.genetic_algorithm)
        self.on_generation = on_generation

        self.store: Optional[PopulationStore] = None
        self.pool: Optional[RandomStreamPool] = None
        self.timer = PhaseTimer()
        self.report_builder = ReportBuilder(sessions, rooms)

        self.statistics = tools.Statistics()
        self.statistics.register("max", np.max)
        self.statistics.register("avg", np.mean)
        self.statistics.register("min", np.min)
        self.statistics.register("std", np.std)
        self.logbook = self._new_logbook()

        self.toolbox: base.Toolbox = self.setup_deap_toolbox()

        logger.info(
            f"Initialized session scheduler: {sessions.size()} sessions, "
            f"{num_timeslots} timeslots x {rooms.size()} rooms"
        )

    @property
    def num_rooms(self) -> int:
        return self.rooms.size()

    def setup_deap_toolbox(self) -> base.Toolbox:
        """Register the phase operators with a DEAP toolbox."""
        toolbox = base.Toolbox()
        toolbox.register("map", map)
        toolbox.register("initialize", initialize_population)
        toolbox.register("fix", fix_population, sessions=self.sessions)
        toolbox.register("evaluate", rate_population, sessions=self.sessions)
        toolbox.register("select", compute_weights)
        toolbox.register("mate", breed_population)
        toolbox.register("mutate", mutate_population)
        return toolbox

    def _new_logbook(self) -> tools.Logbook:
        logbook = tools.Logbook()
        logbook.header = [
            "gen",
            "best_index",
            "max",
            "avg",
            "min",
            "std",
            "order",
            "oversubscribed",
            "theme",
            "priority",
        ]
        return logbook

    def run(self) -> EvolutionReport:
        """Run with the scheduler's configured parameters."""
        p = self.parameters
        p.validate()
        return self.run_genetic(
            p.population_size, p.elite_size, p.mutation_rate, p.generations
        )

    def run_genetic(
        self,
        population_size: int,
        elite_size: int,
        mutation_rate: float,
        generations: int,
    ) -> EvolutionReport:
        """
        Evolve a population of schedules.

        Args:
            population_size: Number of candidate schedules per generation.
            elite_size: Top candidates copied unchanged into each new generation.
            mutation_rate: Per-cell probability of a timeslot swap.
            generations: Generation budget.

        Returns:
            EvolutionReport for the run. The best schedule stays available
            through get_best_schedule() afterwards.
        """
        validate_run_parameters(population_size, elite_size, mutation_rate, generations)
        self.parameters.validate_execution()

        start_time = time.time()
        self.timer.reset()
        self.logbook = self._new_logbook()
        self.store = PopulationStore(
            population_size,
            self.num_timeslots,
            self.num_rooms,
            num_themes=len(self.sessions.themes()),
        )
        self.pool = RandomStreamPool(
            self.parameters.pool_size or population_size, self.parameters.seed
        )

        logger.info(
            f"Starting genetic run: population={population_size}, elite={elite_size}, "
            f"mutation_rate={mutation_rate}, generations={generations}"
        )

        convergence_generation = None
        generations_run = 0

        with ThreadPoolExecutor(max_workers=self.parameters.num_workers) as executor:
            self.toolbox.register("map", executor.map)
            try:
                with self.timer.phase("initialize"):
                    self.toolbox.initialize(self.store, self.pool, map_fn=self.toolbox.map)
                self._check_invariant(self.store.current, "initialization")

                with self.timer.phase("fix"):
                    self.toolbox.fix(self.store, map_fn=self.toolbox.map)
                self._check_invariant(self.store.current, "repair")

                for generation in range(generations):
                    with self.timer.phase("rate"):
                        best_rating = self.toolbox.evaluate(
                            self.store, map_fn=self.toolbox.map
                        )
                    self.record_generation(generation)
                    generations_run = generation + 1

                    if self.optimum_reached(best_rating):
                        convergence_generation = generation
                        logger.info(
                            f"Best rating {best_rating:.6f} reached the optimum at "
                            f"generation {generation}"
                        )
                        break

                    with self.timer.phase("select"):
                        self.toolbox.select(self.store)

                    with self.timer.phase("breed"):
                        self.toolbox.mate(
                            self.store, self.pool, elite_size, map_fn=self.toolbox.map
                        )
                    self._check_invariant(self.store.next, "crossover")

                    with self.timer.phase("mutate"):
                        self.toolbox.mutate(
                            self.store, self.pool, mutation_rate, map_fn=self.toolbox.map
                        )
                    self._check_invariant(self.store.next, "mutation")

                    self.store.swap()

                    with self.timer.phase("fix"):
                        self.toolbox.fix(self.store, map_fn=self.toolbox.map)
                    self._check_invariant(self.store.current, "repair")
                else:
                    # Rate the last bred generation so the ranking describes
                    # the grids held in the current buffer.
                    with self.timer.phase("rate"):
                        self.toolbox.evaluate(self.store, map_fn=self.toolbox.map)
            finally:
                self.toolbox.register("map", map)

        total_time = time.time() - start_time
        phase_timings = self.timer.summary()
        for name, timing in phase_timings.items():
            logger.debug(
                f"Phase {name}: {timing['count']} calls, {timing['total_seconds']:.3f}s"
            )
        logger.info(
            f"Genetic run finished after {generations_run} generations in "
            f"{total_time:.2f}s; best rating {self.store.best_rating:.6f}"
        )

        return EvolutionReport(
            success=True,
            best_rating=self.store.best_rating,
            best_schedule=self.store.current[self.store.best_index].copy(),
            generations_run=generations_run,
            convergence_generation=convergence_generation,
            total_time=total_time,
            phase_timings=phase_timings,
            logbook=self.logbook,
        )

    def optimum_reached(self, best_rating: float) -> bool:
        max_rating = self.parameters.max_rating
        if max_rating is None:
            return False
        return best_rating >= max_rating - self.parameters.rating_tolerance

    def record_generation(self, generation: int) -> GenerationRecord:
        """Log the best candidate of the freshly rated generation."""
        store = self._require_store()
        stats = self.statistics.compile(store.ratings)
        breakdown = best_breakdown(store)

        self.logbook.record(
            gen=generation,
            best_index=store.best_index,
            order=breakdown.order_penalty,
            oversubscribed=breakdown.oversubscribed_penalty,
            theme=breakdown.theme_penalty,
            priority=breakdown.priority_penalty,
            **stats,
        )

        logger.info(f"Generation {generation}: best rating {breakdown.rating:.6f}")
        logger.debug(
            f"Penalties of best schedule: order={breakdown.order_penalty}, "
            f"oversubscribed={breakdown.oversubscribed_penalty}, "
            f"theme={breakdown.theme_penalty}, priority={breakdown.priority_penalty}"
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(self.format_schedule(store.best_index))

        record = GenerationRecord(
            generation=generation,
            best_index=store.best_index,
            best_rating=breakdown.rating,
            average_rating=float(stats["avg"]),
            worst_rating=float(stats["min"]),
            order_penalty=breakdown.order_penalty,
            oversubscribed_penalty=breakdown.oversubscribed_penalty,
            theme_penalty=breakdown.theme_penalty,
            priority_penalty=breakdown.priority_penalty,
            best_schedule=(
                store.current[store.best_index].copy()
                if self.parameters.record_best_schedule
                else None
            ),
        )
        if self.on_generation is not None:
            self.on_generation(record)
        return record

    def _check_invariant(self, schedules: np.ndarray, phase: str) -> None:
        if not self.parameters.validate_generations:
            return
        invalid = find_invalid_schedules(schedules)
        if invalid:
            raise PermutationInvariantError(invalid, phase)

    def _require_store(self) -> PopulationStore:
        if self.store is None:
            raise RuntimeError("No population yet; call run_genetic() first")
        return self.store

    def validate_schedules(self) -> List[int]:
        """Indices of current schedules that are not permutation grids."""
        return find_invalid_schedules(self._require_store().current)

    @property
    def best_rating(self) -> float:
        return self._require_store().best_rating

    def get_best_schedule(self) -> np.ndarray:
        """Read-only (timeslots x rooms) view of the best-rated schedule."""
        store = self._require_store()
        return read_only_view(store.current[store.best_index])

    def format_schedule(self, index: int) -> str:
        """Text listing of current schedule `index`."""
        return self.report_builder.format_text(self._require_store().current[index])

    def record(
        self, filename: Union[str, Path], output_format: Optional[ReportFormat] = None
    ) -> bool:
        """Write the best schedule report; returns False if it could not be written."""
        if self.store is None:
            logger.warning("No schedule to record; call run_genetic() first")
            return False
        return self.report_builder.write(
            filename,
            self.store.current[self.store.best_index],
            rating=self.store.best_rating,
            output_format=output_format,
        )


def create_session_scheduler(
    sessions: SessionCatalog,
    rooms: RoomCatalog,
    num_timeslots: int,
    on_generation: Optional[GenerationCallback] = None,
    **kwargs,
) -> SessionScheduler:
    """Build a scheduler from keyword overrides of the engine-wide parameters."""
    parameters = replace(config.genetic_algorithm, **kwargs)
    return SessionScheduler(
        sessions, rooms, num_timeslots, parameters=parameters, on_generation=on_generation
    )
