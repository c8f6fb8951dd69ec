"""Independent feasibility checks for dispatch schedules."""

from uc_engine.validation.checks import (
    Rule,
    ScheduleChecker,
    Violation,
    total_emissions,
)

__all__ = [
    "Rule",
    "ScheduleChecker",
    "Violation",
    "total_emissions",
]
