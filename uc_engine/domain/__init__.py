"""Domain models: problem instances and dispatch schedules."""

from uc_engine.domain.models import (
    BatteryConfig,
    CostBreakdown,
    DemandProfile,
    DispatchOutcome,
    FossilUnit,
    HourlyDispatch,
    ProblemInstance,
    ReliabilityPolicy,
    RenewableProfile,
    Schedule,
    SolveStatus,
    TimeHorizon,
    UnitDispatch,
)

__all__ = [
    "BatteryConfig",
    "CostBreakdown",
    "DemandProfile",
    "DispatchOutcome",
    "FossilUnit",
    "HourlyDispatch",
    "ProblemInstance",
    "ReliabilityPolicy",
    "RenewableProfile",
    "Schedule",
    "SolveStatus",
    "TimeHorizon",
    "UnitDispatch",
]
