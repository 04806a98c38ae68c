"""Evaluation helpers shared by all strategies.

Contains precondition checks for scheduling requests, conversion of working
machine state / assignment vectors into a frozen ``Schedule``, the makespan
lower bound and a full validator used by tests and the compare mode.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from .errors import MAX_LOAD, InvalidMachineCount, LoadOverflow, SchedulingError
from .models import Job, Machine, Schedule


def check_inputs(jobs: Iterable[Job], machine_count: int) -> tuple[Job, ...]:
    """Validate a scheduling request before any search work.

    Args:
        jobs: Jobs to schedule (any iterable, consumed once).
        machine_count: Number of identical machines.

    Returns:
        The jobs as a tuple, in input order.

    Raises:
        InvalidMachineCount: ``machine_count`` is not an integer, is negative,
            or is zero while there are jobs to place.
        SchedulingError: Two jobs share the same id.
        LoadOverflow: Total processing time exceeds ``MAX_LOAD``.
    """
    jobs = tuple(jobs)
    if isinstance(machine_count, bool) or not isinstance(machine_count, int):
        raise InvalidMachineCount(f"machine_count must be an integer, got {machine_count!r}")
    if machine_count < 0 or (machine_count == 0 and jobs):
        raise InvalidMachineCount(
            f"machine_count must be positive for {len(jobs)} job(s), got {machine_count}"
        )
    seen: set[int] = set()
    for job in jobs:
        if job.id in seen:
            raise SchedulingError(f"Duplicate job id: {job.id}")
        seen.add(job.id)
    total = sum(job.processing_time for job in jobs)
    if total > MAX_LOAD:
        raise LoadOverflow(f"Total processing time {total} exceeds {MAX_LOAD}")
    return jobs


def new_machines(machine_count: int) -> list[Machine]:
    return [Machine(id=i) for i in range(machine_count)]


def compute_makespan(loads: Iterable[int]) -> int:
    return max(loads, default=0)


def schedule_from_machines(machines: Sequence[Machine]) -> Schedule:
    """Freeze working machine state into a ``Schedule`` snapshot."""
    rows = tuple(m.snapshot() for m in machines)
    return Schedule(machines=rows, makespan=compute_makespan(r.total_load for r in rows))


def compute_loads(
    jobs: Sequence[Job], machine_count: int, assignment: Sequence[int]
) -> list[int]:
    """Loads per machine for ``assignment[i]`` = machine of ``jobs[i]``."""
    loads = [0] * machine_count
    for job, machine in zip(jobs, assignment):
        loads[machine] += job.processing_time
    return loads


def schedule_from_assignment(
    jobs: Sequence[Job], machine_count: int, assignment: Sequence[int]
) -> Schedule:
    """Decode an assignment vector (job index -> machine id) into a schedule.

    Jobs appear on each machine in input order.

    Raises:
        ValueError: If the vector length differs from the number of jobs or
            a machine id is out of range.
    """
    if len(assignment) != len(jobs):
        raise ValueError(
            f"Assignment length {len(assignment)} != number of jobs {len(jobs)}"
        )
    machines = new_machines(machine_count)
    for job, machine_id in zip(jobs, assignment):
        if not (0 <= machine_id < machine_count):
            raise ValueError(f"Machine index out of range for job {job.id}: {machine_id}")
        machines[machine_id].add_job(job)
    return schedule_from_machines(machines)


def makespan_lower_bound(jobs: Sequence[Job], machine_count: int) -> int:
    """Trivial lower bound: max(ceil(total / m), longest job).

    Raises:
        InvalidMachineCount: ``machine_count <= 0`` with jobs present.
    """
    if not jobs:
        return 0
    if machine_count <= 0:
        raise InvalidMachineCount(
            f"machine_count must be positive for {len(jobs)} job(s), got {machine_count}"
        )
    total = sum(j.processing_time for j in jobs)
    longest = max(j.processing_time for j in jobs)
    return max(math.ceil(total / machine_count), longest)


def validate_schedule(
    jobs: Sequence[Job],
    machine_count: int,
    schedule: Schedule,
) -> bool:
    """Validate a schedule's completeness and load bookkeeping.

    Args:
        jobs: Input jobs of the request that produced ``schedule``.
        machine_count: Requested machine count.
        schedule: Candidate result.

    Returns:
        True if the schedule is valid (convenient inside assertions).

    Raises:
        ValueError: If the machine count is wrong, a job is missing, unknown
            or assigned twice, a machine load does not match its jobs, or
            the stored makespan is not the maximum load.
    """
    if schedule.machine_count != machine_count:
        raise ValueError(
            f"Schedule has {schedule.machine_count} machines, expected {machine_count}"
        )
    by_id = {job.id: job for job in jobs}
    seen: set[int] = set()
    for idx, row in enumerate(schedule.machines):
        if row.machine_id != idx:
            raise ValueError(f"Machine at position {idx} has id {row.machine_id}")
        load = 0
        for job_id in row.job_ids:
            if job_id not in by_id:
                raise ValueError(f"Unknown job id {job_id} on machine {row.machine_id}")
            if job_id in seen:
                raise ValueError(f"Job {job_id} assigned more than once")
            seen.add(job_id)
            load += by_id[job_id].processing_time
        if load != row.total_load:
            raise ValueError(
                f"Machine {row.machine_id}: load {row.total_load} != recomputed {load}"
            )
    missing = set(by_id) - seen
    if missing:
        raise ValueError(f"Incomplete schedule, missing jobs: {sorted(missing)}")
    if schedule.makespan != compute_makespan(schedule.loads):
        raise ValueError(
            f"Stored makespan {schedule.makespan} != max load {compute_makespan(schedule.loads)}"
        )
    return True
