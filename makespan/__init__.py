"""Minimum-makespan scheduling of independent jobs on identical parallel machines.

Exports base data structures, the strategies and parsing utilities.
"""

from makespan.algorithms import (  # noqa: F401
    GAConfig,
    exhaustive_search,
    genetic_schedule,
    greedy_schedule,
    lpt_schedule,
)
from makespan.errors import (  # noqa: F401
    InvalidConfiguration,
    InvalidMachineCount,
    LoadOverflow,
    SchedulingError,
)
from makespan.models import Instance, Job, Machine, MachineLoad, Schedule  # noqa: F401
from makespan.parser import parse_instance, reference_cases  # noqa: F401

__all__ = [
    "GAConfig",
    "Instance",
    "InvalidConfiguration",
    "InvalidMachineCount",
    "Job",
    "LoadOverflow",
    "Machine",
    "MachineLoad",
    "Schedule",
    "SchedulingError",
    "exhaustive_search",
    "genetic_schedule",
    "greedy_schedule",
    "lpt_schedule",
    "parse_instance",
    "reference_cases",
]
