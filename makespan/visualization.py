import os
from typing import Optional

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from makespan.models import Job, Schedule  # noqa: E402


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def plot_machine_loads(
    schedule: Schedule,
    jobs: list[Job],
    save_path: str,
    algo_name: str = "",
    show_legend: Optional[bool] = None,
):
    """Draw a Gantt-like chart of the jobs stacked on each machine and save it.

    - One horizontal bar per job, placed back-to-back on its machine.
    - Dashed vertical line marks the makespan.
    - Legend disabled automatically for more than 40 jobs unless forced.
    """
    m = schedule.machine_count
    times = {job.id: job.processing_time for job in jobs}
    ids = [job.id for job in jobs]
    cmap = plt.get_cmap("tab20")
    colors = {job_id: cmap(i % 20) for i, job_id in enumerate(ids)}

    fig, ax = plt.subplots(
        figsize=(min(10 + len(ids) * 0.05, 18), min(0.5 * m + 2, 16)),
        constrained_layout=True,
    )
    for row in schedule.machines:
        start = 0
        for job_id in row.job_ids:
            duration = times[job_id]
            ax.barh(
                row.machine_id,
                duration,
                left=start,
                height=0.8,
                color=colors[job_id],
                alpha=0.85,
                edgecolor="black",
                linewidth=0.6,
            )
            if duration:
                ax.text(start + duration / 2, row.machine_id, str(job_id), ha="center", va="center", fontsize=8)
            start += duration
    ax.axvline(schedule.makespan, color="red", linestyle="--", linewidth=1)
    ax.set_xlabel("Time", fontsize=12)
    ax.set_ylabel("Machine", fontsize=12)
    title = f"Machine loads - makespan = {schedule.makespan}"
    if algo_name:
        title = f"{algo_name}: {title}"
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.set_yticks(range(m))
    ax.set_yticklabels([f"M{i}" for i in range(m)])
    ax.grid(True, alpha=0.25, axis="x", linestyle="--", linewidth=0.7)
    ax.set_ylim(-0.5, m - 0.5)

    if show_legend is None:
        show_legend = len(ids) <= 40
    if show_legend and ids:
        legend_elements = [
            plt.Rectangle(
                (0, 0), 1, 1, facecolor=colors[j], alpha=0.85, edgecolor="black", label=f"Job {j}"
            )
            for j in ids
        ]
        ax.legend(
            handles=legend_elements,
            bbox_to_anchor=(1.02, 1),
            loc="upper left",
            borderaxespad=0.0,
            fontsize=8,
        )

    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=150)
    plt.close(fig)


def plot_makespan_comparison(
    results: dict[str, int],
    save_path: str,
    title: str = "Makespan comparison",
    optimum: Optional[int] = None,
):
    """Bar chart of makespan per algorithm, with the optimum as a reference line."""
    names = list(results)
    values = [results[n] for n in names]
    fig, ax = plt.subplots(figsize=(8, 5), constrained_layout=True)
    bars = ax.bar(names, values, color="steelblue", edgecolor="black")
    for bar, value in zip(bars, values):
        ax.annotate(
            str(value),
            xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
            xytext=(0, 3),
            textcoords="offset points",
            ha="center",
            fontsize=9,
        )
    if optimum is not None:
        ax.axhline(optimum, color="green", linestyle="--", linewidth=1, label=f"optimum = {optimum}")
        ax.legend()
    ax.set_ylabel("Makespan", fontsize=12)
    ax.set_title(title, fontsize=13, fontweight="bold")
    ax.grid(True, alpha=0.3, axis="y")
    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=150)
    plt.close(fig)
