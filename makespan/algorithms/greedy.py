"""Greedy list scheduling in input order."""

from typing import Sequence

from makespan.algorithms.base import least_loaded_schedule
from makespan.evaluation import check_inputs
from makespan.models import Job, Schedule


def greedy_schedule(jobs: Sequence[Job], machine_count: int) -> Schedule:
    """Assign each job, in the order given, to the currently least loaded machine.

    Single deterministic pass without backtracking; ties go to the lowest
    machine id. No approximation guarantee beyond the classic 2 - 1/m of
    arbitrary-order list scheduling.

    Raises:
        InvalidMachineCount: see ``check_inputs``.
    """
    jobs = check_inputs(jobs, machine_count)
    return least_loaded_schedule(jobs, machine_count)
