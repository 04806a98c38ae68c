"""Typed failures raised by the scheduling strategies.

All of them derive from :class:`ValueError` so that callers already handling
bad input the usual way keep working.
"""

MAX_LOAD = 2**63 - 1  # signed 64-bit load counters


class SchedulingError(ValueError):
    """Base class for invalid scheduling requests."""


class InvalidMachineCount(SchedulingError):
    """Machine count is not a positive integer while jobs are pending."""


class InvalidConfiguration(SchedulingError):
    """Genetic algorithm hyper-parameters outside their allowed range."""


class LoadOverflow(SchedulingError):
    """Accumulated processing time would not fit a 64-bit load counter."""
