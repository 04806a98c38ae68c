"""Pytest configuration & custom summary hook.

Also ensures the project root is on sys.path so 'import makespan.*' and
'import main' work without installation.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from makespan.instance_gen import generate_instance  # noqa: E402
from makespan.models import Instance  # noqa: E402


@pytest.fixture
def small_random_instances() -> list[Instance]:
    """Seeded random instances small enough for exhaustive search."""
    out = []
    for seed in range(12):
        n_jobs = 4 + seed % 5  # 4..8 jobs
        machines = 2 + seed % 3  # 2..4 machines
        out.append(generate_instance(n_jobs, machines, seed=seed, low=1, high=15))
    return out


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    collected = terminalreporter._numcollected  # type: ignore[attr-defined]
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        f"Collected: {collected} | Passed: {passed} | Failed: {failed} | "
        f"Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
