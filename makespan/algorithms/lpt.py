"""Longest Processing Time first (LPT) list scheduling."""

from fractions import Fraction
from typing import Sequence

from makespan.algorithms.base import least_loaded_schedule
from makespan.evaluation import check_inputs
from makespan.models import Job, Schedule


def lpt_order(jobs: Sequence[Job]) -> list[Job]:
    """Jobs by descending processing time, ties by ascending job id."""
    return sorted(jobs, key=lambda j: (-j.processing_time, j.id))


def lpt_bound_ratio(machine_count: int) -> Fraction:
    """Graham's LPT worst-case ratio 4/3 - 1/(3m), kept exact."""
    return Fraction(4 * machine_count - 1, 3 * machine_count)


def lpt_schedule(jobs: Sequence[Job], machine_count: int) -> Schedule:
    """Sort jobs longest first, then place each on the least loaded machine.

    The resulting makespan is at most ``lpt_bound_ratio(m)`` times optimal.
    """
    jobs = check_inputs(jobs, machine_count)
    return least_loaded_schedule(lpt_order(jobs), machine_count)
