"""Compare mode execution logic.

Feeds identical instances to every selected strategy, validates and times
each resulting schedule, logs a machine-by-machine report and persists a JSON
summary. Machine-load charts and a per-instance makespan comparison chart may
be rendered next to it.

Decoupled from the CLI entry point so tests and notebooks can reuse it.
"""
from __future__ import annotations

import json
import logging
import os
import random
from datetime import datetime
from typing import Dict, List, Sequence

from makespan.evaluation import makespan_lower_bound, validate_schedule
from makespan.models import Instance, Schedule
from makespan.visualization import plot_machine_loads, plot_makespan_comparison
from .common import AlgoParams, run_algorithm

logger = logging.getLogger("makespan.compare")

ALGORITHMS = ("exhaustive", "greedy", "lpt", "genetic")


def format_schedule(instance: Instance, schedule: Schedule) -> List[str]:
    """Human readable report lines: one per machine plus the makespan."""
    times = {job.id: job.processing_time for job in instance.jobs}
    lines = []
    for row in schedule.machines:
        jobs_str = " ".join(f"{j}({times[j]})" for j in row.job_ids)
        lines.append(f"Machine {row.machine_id}: {jobs_str} - Total Load: {row.total_load}")
    lines.append(f"Makespan: {schedule.makespan}")
    return lines


def instance_keys(instances: Sequence[Instance]) -> List[str]:
    """Result keys: the instance name, suffixed with '#<position>' when the name repeats."""
    counts: Dict[str, int] = {}
    for instance in instances:
        counts[instance.name] = counts.get(instance.name, 0) + 1
    return [
        inst.name if counts[inst.name] == 1 else f"{inst.name}#{idx}"
        for idx, inst in enumerate(instances)
    ]


def run_compare(
    instances: Sequence[Instance],
    algorithms: Sequence[str],
    params: AlgoParams,
    rng: random.Random,
    out_dir: str,
    charts: bool = True,
) -> Dict[str, Dict[str, Dict]]:
    """Run every algorithm on every instance.

    Args:
        instances: Scheduling requests.
        algorithms: Subset of ``ALGORITHMS``.
        params: Shared algorithm hyper-parameters.
        rng: Random generator handed to the genetic algorithm.
        out_dir: Directory for JSON results and charts (created if missing).
        charts: Render PNG charts when True.

    Returns:
        Nested mapping ``instance key -> algorithm -> result`` (keys from
        ``instance_keys``). A result holds ``makespan``, ``runtime_us``,
        ``loads`` and ``machines`` (job ids per machine). Skipped exhaustive
        runs are absent.

    Raises:
        ValueError: If an unknown algorithm name is provided.
        InvalidMachineCount: If an instance has jobs but no machines.
    """
    unknown = [a for a in algorithms if a not in ALGORITHMS]
    if unknown:
        raise ValueError(f"Unknown algorithm(s): {', '.join(unknown)}")
    os.makedirs(out_dir, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    results: Dict[str, Dict[str, Dict]] = {}
    schedules: Dict[str, Dict[str, Schedule]] = {}
    keys = instance_keys(instances)
    for key, instance in zip(keys, instances):
        logger.info(
            "Instance: %s jobs=%d machines=%d lower_bound=%d",
            key,
            instance.jobs_number,
            instance.machine_count,
            makespan_lower_bound(instance.jobs, instance.machine_count),
        )
        results[key] = {}
        schedules[key] = {}
        for name in algorithms:
            if name == "exhaustive" and instance.jobs_number > params.exhaustive_max_jobs:
                logger.warning(
                    "Skipping exhaustive search for %s: %d jobs > exhaustive_max_jobs=%d",
                    key,
                    instance.jobs_number,
                    params.exhaustive_max_jobs,
                )
                continue
            progress: list[int] = []
            schedule, elapsed = run_algorithm(name, instance, params, rng, progress=progress)
            validate_schedule(instance.jobs, instance.machine_count, schedule)
            runtime_us = int(elapsed * 1_000_000)
            for line in format_schedule(instance, schedule):
                logger.info("[%s] %s", name, line)
            logger.info("[%s] Runtime: %d microseconds", name, runtime_us)
            if instance.optimum is not None and schedule.makespan > instance.optimum:
                logger.info(
                    "[%s] gap to optimum: %d (optimum=%d)",
                    name,
                    schedule.makespan - instance.optimum,
                    instance.optimum,
                )
            results[key][name] = {
                "makespan": schedule.makespan,
                "runtime_us": runtime_us,
                "loads": schedule.loads,
                "machines": [list(row.job_ids) for row in schedule.machines],
            }
            if progress:
                results[key][name]["progress"] = progress
            schedules[key][name] = schedule

    def _avg(vals: List[float]) -> float | None:
        return sum(vals) / len(vals) if vals else None

    averages = {}
    for name in algorithms:
        spans = [r[name]["makespan"] for r in results.values() if name in r]
        times = [r[name]["runtime_us"] for r in results.values() if name in r]
        averages[name] = {"avg_makespan": _avg(spans), "avg_runtime_us": _avg(times)}
        logger.info(
            "Summary %-10s: instances=%d avg_makespan=%s avg_runtime_us=%s",
            name,
            len(spans),
            averages[name]["avg_makespan"],
            averages[name]["avg_runtime_us"],
        )

    try:
        results_path = os.path.join(out_dir, f"compare_results_{stamp}.json")
        payload = {
            "timestamp": stamp,
            "algorithms": list(algorithms),
            "instances": [
                {
                    "name": key,
                    "machines": inst.machine_count,
                    "jobs": [[j.id, j.processing_time] for j in inst.jobs],
                    "optimum": inst.optimum,
                    "results": results[key],
                }
                for key, inst in zip(keys, instances)
            ],
            "averages": averages,
        }
        with open(results_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        logger.info("Saved compare results JSON to %s", results_path)
    except OSError as e:  # pragma: no cover
        logger.warning("Failed to write results JSON: %s", e)

    if charts:
        try:
            for idx, (key, instance) in enumerate(zip(keys, instances)):
                if instance.machine_count <= 0:
                    continue
                for name, schedule in schedules[key].items():
                    path = os.path.join(
                        out_dir, f"loads_{idx}_{name}_c{schedule.makespan}_{stamp}.png"
                    )
                    plot_machine_loads(schedule, list(instance.jobs), save_path=path, algo_name=name)
                    logger.info("Saved load chart for %s to %s", name, path)
                if schedules[key]:
                    path = os.path.join(out_dir, f"compare_{idx}_{stamp}.png")
                    plot_makespan_comparison(
                        {k: v.makespan for k, v in schedules[key].items()},
                        save_path=path,
                        title=key,
                        optimum=instance.optimum,
                    )
        except (OSError, ValueError) as e:  # pragma: no cover
            logger.warning("Failed to create charts: %s", e)
    return results
