"""Genetic algorithm for the minimum makespan problem.

Chromosome encoding: ``genes[i]`` is the machine id of ``jobs[i]``. Fitness is
the makespan of that assignment (lower is better).

Generation loop (no elitism unless requested):
    evaluate -> for each child: two binary tournaments, uniform crossover,
    per-job mutation -> replace whole population.
After ``generations`` rounds a final evaluation picks the best chromosome of
the last population, which may be worse than the best one ever seen.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from makespan.errors import InvalidConfiguration
from makespan.evaluation import check_inputs, compute_loads, compute_makespan, schedule_from_assignment
from makespan.models import Job, Schedule

logger = logging.getLogger("makespan.genetic")


@dataclass(frozen=True)
class GAConfig:
    """Genetic algorithm hyper-parameters.

    Attributes:
        population_size: Number of chromosomes per generation (> 0).
        generations: Reproduction rounds (>= 0).
        mutation_rate: Per-job reassignment probability in [0, 1].
        random_seed: Seed for the internal generator; None -> OS entropy.
        elitism: Carry the best evaluated chromosome into the next generation.
    """

    population_size: int = 100
    generations: int = 1000
    mutation_rate: float = 0.01
    random_seed: Optional[int] = None
    elitism: bool = False

    def __post_init__(self) -> None:
        validate_config(self)


def validate_config(config: GAConfig) -> None:
    """Raise ``InvalidConfiguration`` for out-of-range hyper-parameters."""
    if not isinstance(config.population_size, int) or config.population_size <= 0:
        raise InvalidConfiguration(
            f"population_size must be a positive integer, got {config.population_size!r}"
        )
    if not isinstance(config.generations, int) or config.generations < 0:
        raise InvalidConfiguration(
            f"generations must be a non-negative integer, got {config.generations!r}"
        )
    if not (0.0 <= config.mutation_rate <= 1.0):
        raise InvalidConfiguration(
            f"mutation_rate must be within [0, 1], got {config.mutation_rate!r}"
        )


@dataclass
class Chromosome:
    genes: list[int]
    fitness: Optional[int] = None

    def copy(self) -> "Chromosome":
        return Chromosome(genes=list(self.genes), fitness=self.fitness)


def random_chromosome(n_jobs: int, machine_count: int, rng: random.Random) -> Chromosome:
    return Chromosome(genes=[rng.randrange(machine_count) for _ in range(n_jobs)])


def evaluate(chromosome: Chromosome, jobs: Sequence[Job], machine_count: int) -> int:
    """Recompute loads from scratch and cache the makespan as fitness."""
    chromosome.fitness = compute_makespan(compute_loads(jobs, machine_count, chromosome.genes))
    return chromosome.fitness


def tournament(population: Sequence[Chromosome], rng: random.Random) -> Chromosome:
    """Binary tournament with replacement; the second draw wins ties."""
    a = population[rng.randrange(len(population))]
    b = population[rng.randrange(len(population))]
    return a if a.fitness < b.fitness else b  # type: ignore[operator]


def uniform_crossover(
    parent1: Chromosome, parent2: Chromosome, rng: random.Random
) -> Chromosome:
    """Each job inherits its machine from either parent with probability 0.5."""
    genes = [
        g1 if rng.random() < 0.5 else g2 for g1, g2 in zip(parent1.genes, parent2.genes)
    ]
    return Chromosome(genes=genes)


def mutate(
    chromosome: Chromosome, machine_count: int, mutation_rate: float, rng: random.Random
) -> int:
    """Move each job with probability ``mutation_rate`` to a different machine.

    The target is uniform over the other ``machine_count - 1`` machines. With a
    single machine there is nowhere to move and nothing happens.

    Returns:
        Number of reassigned jobs.
    """
    if machine_count < 2:
        return 0
    moved = 0
    genes = chromosome.genes
    for i, current in enumerate(genes):
        if rng.random() < mutation_rate:
            target = rng.randrange(machine_count - 1)
            if target >= current:
                target += 1
            genes[i] = target
            moved += 1
    if moved:
        chromosome.fitness = None
    return moved


def best_of(population: Sequence[Chromosome]) -> Chromosome:
    """First chromosome with the minimal fitness."""
    return min(population, key=lambda c: c.fitness)  # type: ignore[arg-type,return-value]


def genetic_schedule(
    jobs: Sequence[Job],
    machine_count: int,
    config: Optional[GAConfig] = None,
    rng: Optional[random.Random] = None,
    progress: Optional[list[int]] = None,
) -> Schedule:
    """Evolve job -> machine assignments and return the best final chromosome.

    Args:
        jobs: Jobs to schedule.
        machine_count: Number of machines.
        config: Hyper-parameters (defaults: 100 / 1000 / 0.01, no elitism).
        rng: Random source; defaults to ``random.Random(config.random_seed)``.
        progress: Optional list extended in-place with the best fitness of
            each evaluated generation (``generations + 1`` entries).

    Returns:
        Schedule of the minimum-fitness chromosome of the final population.

    Raises:
        InvalidMachineCount: see ``check_inputs``.
        InvalidConfiguration: see ``validate_config``.
    """
    if config is None:
        config = GAConfig()
    jobs = check_inputs(jobs, machine_count)
    validate_config(config)
    if rng is None:
        rng = random.Random(config.random_seed)
    if not jobs:
        return schedule_from_assignment(jobs, machine_count, [])

    n = len(jobs)
    population = [
        random_chromosome(n, machine_count, rng) for _ in range(config.population_size)
    ]
    for gen in range(config.generations):
        for chromosome in population:
            evaluate(chromosome, jobs, machine_count)
        best = best_of(population)
        if progress is not None:
            progress.append(best.fitness)  # type: ignore[arg-type]
        logger.debug("[ga] generation=%d best=%s", gen, best.fitness)

        next_population: list[Chromosome] = []
        if config.elitism:
            next_population.append(best.copy())
        while len(next_population) < config.population_size:
            parent1 = tournament(population, rng)
            parent2 = tournament(population, rng)
            child = uniform_crossover(parent1, parent2, rng)
            mutate(child, machine_count, config.mutation_rate, rng)
            next_population.append(child)
        population = next_population

    for chromosome in population:
        evaluate(chromosome, jobs, machine_count)
    best = best_of(population)
    if progress is not None:
        progress.append(best.fitness)  # type: ignore[arg-type]
    logger.info(
        "[ga] done jobs=%d machines=%d generations=%d best=%s",
        n,
        machine_count,
        config.generations,
        best.fitness,
    )
    return schedule_from_assignment(jobs, machine_count, best.genes)
