"""Exhaustive search (complete enumeration) for the minimum makespan."""

from __future__ import annotations

import logging
from typing import Sequence

from makespan.algorithms.base import SearchState
from makespan.evaluation import check_inputs, new_machines, schedule_from_machines
from makespan.models import Job, Machine, Schedule

logger = logging.getLogger("makespan.exhaustive")


def exhaustive_search(
    jobs: Sequence[Job],
    machine_count: int,
    prune: bool = False,
) -> Schedule:
    """Enumerate every job -> machine assignment and keep the best one.

    Jobs are placed in input order; on each level machines are tried in id
    order (add, recurse, undo). A leaf replaces the incumbent only when its
    makespan is strictly smaller, so the first optimal assignment found wins.

    Args:
        jobs: Jobs to schedule. O(m ** N) leaves, keep N small (<= ~12).
        machine_count: Number of machines.
        prune: Cut a branch once its partial max load already reaches the
            incumbent makespan. Returns the same schedule as ``prune=False``.

    ``add_job`` / ``remove_last_job`` keep every load exact through each
    add and undo; the best machines are recomputed with ``Machine.check``
    once before the snapshot is taken.

    Returns:
        Schedule with the globally minimal makespan.

    Raises:
        InvalidMachineCount: see ``check_inputs``.
    """
    jobs = check_inputs(jobs, machine_count)
    machines = new_machines(machine_count)
    state = SearchState()

    def _place(index: int, machines: list[Machine]) -> None:
        if prune and index > 0:
            partial = max(m.total_load for m in machines)
            if partial >= state.best_makespan:
                return
        if index == len(jobs):
            state.update_best(machines, max((m.total_load for m in machines), default=0))
            return
        job = jobs[index]
        for machine in machines:
            machine.add_job(job)
            _place(index + 1, machines)
            machine.remove_last_job(job)

    _place(0, machines)
    logger.debug(
        "exhaustive: jobs=%d machines=%d leaves=%d best=%s",
        len(jobs),
        machine_count,
        state.leaves,
        state.best_makespan,
    )
    jobs_by_id = {job.id: job for job in jobs}
    for machine in state.best_machines:
        machine.check(jobs_by_id)
    return schedule_from_machines(state.best_machines)
