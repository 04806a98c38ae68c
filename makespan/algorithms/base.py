"""Common structures and helper functions for scheduling strategies."""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from makespan.evaluation import new_machines, schedule_from_machines
from makespan.models import Job, Machine, Schedule


class SchedulingStrategy(Protocol):
    """Anything callable as ``strategy(jobs, machine_count) -> Schedule``."""

    def __call__(self, jobs: Sequence[Job], machine_count: int) -> Schedule: ...


@dataclass
class SearchState:
    """Best-so-far bookkeeping for search strategies."""

    best_makespan: float = float("inf")
    best_machines: list[Machine] = field(default_factory=list)
    leaves: int = 0

    def update_best(self, machines: Sequence[Machine], makespan: int) -> bool:
        """Record a deep copy of ``machines`` if strictly better. Returns True if improved."""
        self.leaves += 1
        if makespan < self.best_makespan:
            self.best_makespan = makespan
            self.best_machines = [
                Machine(id=m.id, total_load=m.total_load, assigned_job_ids=list(m.assigned_job_ids))
                for m in machines
            ]
            return True
        return False


def least_loaded_schedule(ordered_jobs: Sequence[Job], machine_count: int) -> Schedule:
    """List scheduling: each job, in the given order, goes to the least loaded machine.

    Machines sit in a min-heap keyed by ``(total_load, id)`` so ties go to
    the lowest machine id. Preconditions are the caller's responsibility.

    ``Machine.add_job`` keeps each load equal to the sum of its jobs, so the
    recomputation via ``Machine.check`` runs once on the finished machines.
    """
    machines = new_machines(machine_count)
    heap = [(0, m.id) for m in machines]
    for job in ordered_jobs:
        _, machine_id = heapq.heappop(heap)
        machine = machines[machine_id]
        machine.add_job(job)
        heapq.heappush(heap, (machine.total_load, machine_id))
    jobs_by_id = {job.id: job for job in ordered_jobs}
    for machine in machines:
        machine.check(jobs_by_id)
    return schedule_from_machines(machines)
