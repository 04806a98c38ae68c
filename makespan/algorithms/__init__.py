"""Scheduling strategies for identical parallel machines.

Contains:
- Exhaustive search (provable optimum, small instances only)
- Greedy list scheduling
- Longest Processing Time first (LPT)
- Genetic algorithm
"""

from makespan.algorithms.base import SchedulingStrategy
from makespan.algorithms.exhaustive import exhaustive_search
from makespan.algorithms.genetic import GAConfig, genetic_schedule
from makespan.algorithms.greedy import greedy_schedule
from makespan.algorithms.lpt import lpt_schedule

STRATEGIES: dict[str, SchedulingStrategy] = {
    "exhaustive": exhaustive_search,
    "greedy": greedy_schedule,
    "lpt": lpt_schedule,
    "genetic": genetic_schedule,
}


def get_strategy(name: str) -> SchedulingStrategy:
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {name}") from None


__all__ = [
    "GAConfig",
    "STRATEGIES",
    "SchedulingStrategy",
    "exhaustive_search",
    "genetic_schedule",
    "get_strategy",
    "greedy_schedule",
    "lpt_schedule",
]
