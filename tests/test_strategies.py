"""Properties shared by all strategies plus exhaustive / greedy / LPT specifics."""

from __future__ import annotations

from fractions import Fraction

import pytest

from makespan.algorithms import (
    STRATEGIES,
    GAConfig,
    exhaustive_search,
    genetic_schedule,
    get_strategy,
    greedy_schedule,
    lpt_schedule,
)
from makespan.algorithms.lpt import lpt_bound_ratio, lpt_order
from makespan.errors import InvalidMachineCount
from makespan.evaluation import makespan_lower_bound, validate_schedule
from makespan.models import Instance, Job
from makespan.parser import reference_cases

FAST_GA = GAConfig(population_size=30, generations=40, mutation_rate=0.05, random_seed=1)


def run(name: str, instance: Instance):
    if name == "genetic":
        return genetic_schedule(instance.jobs, instance.machine_count, FAST_GA)
    return STRATEGIES[name](instance.jobs, instance.machine_count)


@pytest.mark.parametrize("name", sorted(STRATEGIES))
@pytest.mark.parametrize("case", reference_cases(), ids=lambda c: c.name)
def test_reference_cases_valid_and_bounded(name: str, case: Instance):
    sched = run(name, case)
    validate_schedule(case.jobs, case.machine_count, sched)
    assert sched.makespan >= case.optimum
    assert sched.makespan >= makespan_lower_bound(case.jobs, case.machine_count)


@pytest.mark.parametrize("case", reference_cases(), ids=lambda c: c.name)
def test_exhaustive_finds_reference_optimum(case: Instance):
    assert exhaustive_search(case.jobs, case.machine_count).makespan == case.optimum


def test_single_job_same_for_every_strategy():
    jobs = [Job(1, 10)]
    for name in STRATEGIES:
        sched = run(name, Instance("single", tuple(jobs), 3))
        assert sched.makespan == 10
        assert sorted(sched.loads) == [0, 0, 10]


@pytest.mark.parametrize("name", sorted(STRATEGIES))
def test_empty_job_list(name: str):
    sched = run(name, Instance("empty", (), 3))
    assert sched.makespan == 0
    assert sched.loads == [0, 0, 0]
    assert all(m.job_ids == () for m in sched.machines)


@pytest.mark.parametrize("name", sorted(STRATEGIES))
@pytest.mark.parametrize("machine_count", [0, -2])
def test_invalid_machine_count(name: str, machine_count: int):
    with pytest.raises(InvalidMachineCount):
        run(name, Instance("bad", (Job(1, 3),), machine_count))


def test_properties_on_random_instances(small_random_instances):
    for inst in small_random_instances:
        optimum = exhaustive_search(inst.jobs, inst.machine_count)
        validate_schedule(inst.jobs, inst.machine_count, optimum)
        for name in STRATEGIES:
            sched = run(name, inst)
            validate_schedule(inst.jobs, inst.machine_count, sched)
            assert sched.makespan >= makespan_lower_bound(inst.jobs, inst.machine_count)
            assert optimum.makespan <= sched.makespan, (inst.name, name)


def test_lpt_approximation_bound(small_random_instances):
    for inst in small_random_instances:
        opt = exhaustive_search(inst.jobs, inst.machine_count).makespan
        lpt = lpt_schedule(inst.jobs, inst.machine_count).makespan
        assert lpt <= lpt_bound_ratio(inst.machine_count) * opt, inst.name


def test_lpt_tight_example():
    # Graham's worst case for m=2: jobs 3,3,2,2,2 -> LPT 7, optimum 6
    jobs = [Job(i, p) for i, p in enumerate([3, 3, 2, 2, 2], start=1)]
    assert lpt_schedule(jobs, 2).makespan == 7
    assert exhaustive_search(jobs, 2).makespan == 6
    assert lpt_bound_ratio(2) == Fraction(7, 6)
    assert 7 <= lpt_bound_ratio(2) * 6


def test_lpt_tight_example_three_machines():
    # m=3: jobs 5,5,4,4,3,3,3 -> LPT 11, optimum 9, ratio exactly 11/9
    jobs = [Job(i, p) for i, p in enumerate([5, 5, 4, 4, 3, 3, 3], start=1)]
    lpt = lpt_schedule(jobs, 3).makespan
    opt = exhaustive_search(jobs, 3).makespan
    assert (lpt, opt) == (11, 9)
    assert lpt == lpt_bound_ratio(3) * opt


def test_pruned_exhaustive_matches_plain(small_random_instances):
    for inst in small_random_instances:
        plain = exhaustive_search(inst.jobs, inst.machine_count)
        pruned = exhaustive_search(inst.jobs, inst.machine_count, prune=True)
        assert plain == pruned


def test_exhaustive_keeps_first_found_optimum():
    jobs = [Job(1, 5), Job(2, 5)]
    sched = exhaustive_search(jobs, 2)
    # (M0,M0) is explored first (10), then (M0,M1) gives 5 and is kept;
    # the later (M1,M0) tie is not taken.
    assert [m.job_ids for m in sched.machines] == [(1,), (2,)]


def test_greedy_in_input_order_with_low_id_tie_break():
    jobs = [Job(1, 2), Job(2, 3), Job(3, 5), Job(4, 7), Job(5, 1)]
    sched = greedy_schedule(jobs, 2)
    # 1->M0(2), 2->M1(3), 3->M0(7), 4->M1(10), 5->M0(8)
    assert [m.job_ids for m in sched.machines] == [(1, 3, 5), (2, 4)]
    assert sched.loads == [8, 10]
    assert sched.makespan == 10


def test_greedy_ties_go_to_lowest_machine():
    jobs = [Job(i, 4) for i in range(1, 4)]
    sched = greedy_schedule(jobs, 3)
    assert [m.job_ids for m in sched.machines] == [(1,), (2,), (3,)]


def test_lpt_order_is_descending_then_by_id():
    jobs = [Job(3, 5), Job(1, 2), Job(2, 5), Job(4, 7)]
    assert [j.id for j in lpt_order(jobs)] == [4, 2, 3, 1]


def test_lpt_reference_case_5():
    case = reference_cases()[4]
    sched = lpt_schedule(case.jobs, case.machine_count)
    # 4(7)->M0, 6(6)->M1, 5(3)->M2, 1(2)->M2, 3(2)->M2, 2(1)->M1
    assert [m.job_ids for m in sched.machines] == [(4,), (6, 2), (5, 1, 3)]
    assert sched.makespan == 7


def test_greedy_and_lpt_are_deterministic(small_random_instances):
    for inst in small_random_instances:
        assert greedy_schedule(inst.jobs, inst.machine_count) == greedy_schedule(
            inst.jobs, inst.machine_count
        )
        assert lpt_schedule(inst.jobs, inst.machine_count) == lpt_schedule(
            inst.jobs, inst.machine_count
        )


def test_get_strategy():
    assert get_strategy("lpt") is lpt_schedule
    with pytest.raises(ValueError):
        get_strategy("tabu")


def test_zero_length_jobs_are_placed():
    jobs = [Job(1, 0), Job(2, 0), Job(3, 4)]
    for name in STRATEGIES:
        sched = run(name, Instance("zeros", tuple(jobs), 2))
        validate_schedule(jobs, 2, sched)
        assert sched.makespan == 4
