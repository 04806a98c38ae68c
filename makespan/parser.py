"""Instance loading: plain-text instance files and the built-in reference cases.

File format (``#`` starts a comment, blank lines are ignored)::

    machines 3
    1 2
    2 1
    3 7

First meaningful line declares the machine count, every following line is one
job as ``<job_id> <processing_time>``.
"""

from __future__ import annotations

import os

from makespan.models import Instance, Job


def _meaningful_lines(path: str) -> list[tuple[int, str]]:
    with open(path, "r", encoding="utf-8") as f:
        rows = []
        for lineno, raw in enumerate(f, start=1):
            line = raw.split("#", 1)[0].strip()
            if line:
                rows.append((lineno, line))
    return rows


def parse_instance(path: str, name: str | None = None) -> Instance:
    """Parse a single instance file.

    Raises:
        ValueError: On a missing/invalid header, wrong token count,
            non-integer or negative values, or duplicate job ids.
    """
    rows = _meaningful_lines(path)
    if not rows:
        raise ValueError(f"{path}: empty instance file")

    lineno, header = rows[0]
    tokens = header.split()
    if len(tokens) != 2 or tokens[0].lower() != "machines":
        raise ValueError(f"{path}:{lineno}: expected 'machines <count>', got {header!r}")
    try:
        machine_count = int(tokens[1])
    except ValueError:
        raise ValueError(f"{path}:{lineno}: machine count is not an integer") from None
    if machine_count <= 0:
        raise ValueError(f"{path}:{lineno}: machine count must be positive")

    jobs: list[Job] = []
    seen: set[int] = set()
    for lineno, line in rows[1:]:
        tokens = line.split()
        if len(tokens) != 2:
            raise ValueError(f"{path}:{lineno}: expected '<job_id> <processing_time>'")
        try:
            job_id, processing_time = int(tokens[0]), int(tokens[1])
        except ValueError:
            raise ValueError(f"{path}:{lineno}: non-integer value in {line!r}") from None
        if processing_time < 0:
            raise ValueError(f"{path}:{lineno}: negative processing time")
        if job_id in seen:
            raise ValueError(f"{path}:{lineno}: duplicate job id {job_id}")
        seen.add(job_id)
        jobs.append(Job(id=job_id, processing_time=processing_time))

    return Instance(
        name=name or os.path.basename(path),
        jobs=tuple(jobs),
        machine_count=machine_count,
    )


def load_instances(source: str | list[str]) -> list[Instance]:
    """Resolve the ``instances`` config entry.

    Accepts ``"reference"``, a file path, a directory (every non-hidden file,
    sorted) or a list of any of these.
    """
    if isinstance(source, list):
        out: list[Instance] = []
        for item in source:
            out.extend(load_instances(item))
        return out
    if source == "reference":
        return reference_cases()
    if os.path.isdir(source):
        files = sorted(
            os.path.join(source, f) for f in os.listdir(source) if not f.startswith(".")
        )
        return [parse_instance(f) for f in files if os.path.isfile(f)]
    if not os.path.isfile(source):
        raise FileNotFoundError(f"Instance not found: {source}")
    return [parse_instance(source)]


def _jobs(*pairs: tuple[int, int]) -> tuple[Job, ...]:
    return tuple(Job(id=i, processing_time=p) for i, p in pairs)


def reference_cases() -> list[Instance]:
    """The five classic test cases with their known optimal makespan."""
    return [
        Instance(
            "Test Case 1: Basic Test",
            _jobs((1, 2), (2, 3), (3, 5), (4, 7), (5, 1)),
            2,
            optimum=9,
        ),
        Instance(
            "Test Case 2: All Jobs of Equal Length",
            _jobs((1, 5), (2, 5), (3, 5), (4, 5)),
            2,
            optimum=10,
        ),
        Instance(
            "Test Case 3: More Machines than Jobs",
            _jobs((1, 6), (2, 2), (3, 8)),
            4,
            optimum=8,
        ),
        Instance("Test Case 4: Single Job", _jobs((1, 10)), 3, optimum=10),
        Instance(
            "Test Case 5: Complex Test",
            _jobs((1, 2), (2, 1), (3, 2), (4, 7), (5, 3), (6, 6)),
            3,
            optimum=7,
        ),
    ]
