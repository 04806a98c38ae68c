import random

from makespan.errors import InvalidMachineCount
from makespan.models import Instance, Job


def generate_instance(
    n_jobs: int,
    machine_count: int,
    seed: int | None = None,
    low: int = 1,
    high: int = 20,
    name: str | None = None,
) -> Instance:
    """Generate a random instance with processing times uniform in [low, high]."""
    if machine_count <= 0:
        raise InvalidMachineCount(f"machine_count must be positive, got {machine_count}")
    if low < 0 or high < low:
        raise ValueError(f"Invalid processing time range [{low}, {high}]")
    rng = random.Random(seed)
    jobs = tuple(Job(id=i + 1, processing_time=rng.randint(low, high)) for i in range(n_jobs))
    return Instance(
        name=name or f"random_n{n_jobs}_m{machine_count}_s{seed}",
        jobs=jobs,
        machine_count=machine_count,
    )
