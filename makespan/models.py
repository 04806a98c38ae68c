"""Core data structures for identical parallel machine scheduling.

This module defines:
    Job         -- immutable job with a caller-assigned id and processing time.
    Machine     -- mutable working state used while a strategy builds a schedule.
    MachineLoad -- frozen snapshot of one machine inside a finished schedule.
    Schedule    -- frozen result (per-machine loads plus makespan).
    Instance    -- named scheduling request (jobs + machine count).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class Job:
    """Single non-preemptible job.

    Attributes:
        id: Caller-assigned identifier, unique inside one request.
        processing_time: Non-negative duration.
    """

    id: int
    processing_time: int

    def __post_init__(self) -> None:
        if self.processing_time < 0:
            raise ValueError(
                f"Job {self.id}: processing time must be non-negative, got {self.processing_time}"
            )


@dataclass
class Machine:
    """Working state of one machine during construction / search.

    ``total_load`` is kept equal to the sum of processing times of
    ``assigned_job_ids``; only ``add_job`` and ``remove_last_job`` touch it.
    Both update load and job list together, so the invariant holds after
    every mutation; ``check`` recomputes it from scratch.
    """

    id: int
    total_load: int = 0
    assigned_job_ids: list[int] = field(default_factory=list)

    def add_job(self, job: Job) -> None:
        self.total_load += job.processing_time
        self.assigned_job_ids.append(job.id)

    def remove_last_job(self, job: Job) -> None:
        """Undo the most recent ``add_job(job)`` (backtracking)."""
        if not self.assigned_job_ids or self.assigned_job_ids[-1] != job.id:
            raise ValueError(f"Machine {self.id}: job {job.id} is not the last assigned job")
        self.assigned_job_ids.pop()
        self.total_load -= job.processing_time

    def check(self, jobs_by_id: Mapping[int, Job]) -> None:
        """Recompute the load from scratch and compare with the tracked one."""
        expected = sum(jobs_by_id[j].processing_time for j in self.assigned_job_ids)
        if expected != self.total_load:
            raise ValueError(
                f"Machine {self.id}: tracked load {self.total_load} != recomputed {expected}"
            )

    def snapshot(self) -> "MachineLoad":
        return MachineLoad(
            machine_id=self.id,
            total_load=self.total_load,
            job_ids=tuple(self.assigned_job_ids),
        )


@dataclass(frozen=True)
class MachineLoad:
    """Final load of one machine.

    Fields:
        machine_id: Machine index (0..machine_count-1).
        total_load: Sum of processing times of ``job_ids``.
        job_ids: Assigned job ids in assignment order.
    """

    machine_id: int
    total_load: int
    job_ids: tuple[int, ...]


@dataclass(frozen=True)
class Schedule:
    """Full assignment plus objective value (makespan).

    Fields:
        machines: One ``MachineLoad`` per machine, ordered by machine id.
        makespan: Maximum ``total_load`` across machines (0 when empty).
    """

    machines: tuple[MachineLoad, ...]
    makespan: int

    @property
    def machine_count(self) -> int:
        return len(self.machines)

    @property
    def loads(self) -> list[int]:
        return [m.total_load for m in self.machines]

    def assignment(self) -> dict[int, int]:
        """Return mapping ``job_id -> machine_id``."""
        return {job_id: m.machine_id for m in self.machines for job_id in m.job_ids}

    def machine_of(self, job_id: int) -> int:
        for m in self.machines:
            if job_id in m.job_ids:
                return m.machine_id
        raise KeyError(job_id)


@dataclass(frozen=True)
class Instance:
    """Named scheduling request.

    Attributes:
        name: Human readable label (file name or test case title).
        jobs: Jobs to schedule.
        machine_count: Number of identical machines.
        optimum: Known optimal makespan, if any.
    """

    name: str
    jobs: tuple[Job, ...]
    machine_count: int
    optimum: int | None = None

    @property
    def jobs_number(self) -> int:
        return len(self.jobs)

    @property
    def total_processing_time(self) -> int:
        return sum(j.processing_time for j in self.jobs)
