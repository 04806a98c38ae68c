"""Shared primitives used by execution modes.

This module isolates the light data container with algorithm hyper-parameters
(`AlgoParams`) and a thin dispatch helper (`run_algorithm`) so that each mode
can invoke the strategies uniformly without duplicating timing code.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass

from makespan.algorithms import GAConfig, exhaustive_search, genetic_schedule, get_strategy
from makespan.models import Instance, Schedule


@dataclass(slots=True)
class AlgoParams:
    """Bundle of configurable hyper-parameters.

    Only the genetic algorithm is tunable; ``exhaustive_max_jobs`` guards the
    exponential exhaustive search against large instances.
    """
    ga_population_size: int = 100
    ga_generations: int = 1000
    ga_mutation_rate: float = 0.01
    ga_elitism: bool = False
    exhaustive_max_jobs: int = 12
    exhaustive_prune: bool = False

    def ga_config(self) -> GAConfig:
        return GAConfig(
            population_size=self.ga_population_size,
            generations=self.ga_generations,
            mutation_rate=self.ga_mutation_rate,
            elitism=self.ga_elitism,
        )


def run_algorithm(
    name: str,
    instance: Instance,
    params: AlgoParams,
    rng: random.Random,
    progress: list[int] | None = None,
) -> tuple[Schedule, float]:
    """Execute selected algorithm and return its schedule with the runtime.

    Args:
        name: One of ``{"exhaustive", "greedy", "lpt", "genetic"}``.
        instance: Scheduling request.
        params: Hyper-parameter bundle (only the relevant subset is read).
        rng: Random generator forwarded to the genetic algorithm.
        progress: Optional list mutated in-place with the best fitness of
            every genetic generation.

    Returns:
        Tuple ``(schedule, elapsed_seconds)``.

    Raises:
        ValueError: If an unknown algorithm name is provided.
    """
    t0 = time.perf_counter()
    if name == "genetic":
        schedule = genetic_schedule(
            instance.jobs,
            instance.machine_count,
            params.ga_config(),
            rng=rng,
            progress=progress,
        )
    elif name == "exhaustive":
        schedule = exhaustive_search(
            instance.jobs, instance.machine_count, prune=params.exhaustive_prune
        )
    else:
        schedule = get_strategy(name)(instance.jobs, instance.machine_count)
    return schedule, time.perf_counter() - t0
