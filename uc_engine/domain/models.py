"""Core domain models for the day-ahead unit commitment engine.

All models use Pydantic with strict validation and are frozen once built.
Units:
- Power: MW (megawatts)
- Energy: MWh (megawatt-hours)
- Costs: $/MWh for energy, $ per event for start-ups
- Emissions: tonnes per MWh generated
- Time: hourly steps, hours numbered 1..T
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Type Aliases with Validation
# =============================================================================

PowerMW = Annotated[float, Field(ge=0, description="Power in megawatts (MW)")]
EnergyMWh = Annotated[float, Field(ge=0, description="Energy in megawatt-hours (MWh)")]
CostPerMWh = Annotated[float, Field(ge=0, description="Cost in $/MWh")]
Efficiency = Annotated[float, Field(gt=0, le=1, description="Efficiency ratio (0-1]")]
Fraction = Annotated[float, Field(ge=0, le=1, description="Fraction (0-1)")]
DurationHours = Annotated[int, Field(ge=1, description="Duration in whole hours")]


# =============================================================================
# Enums
# =============================================================================


class SolveStatus(str, Enum):
    """Outcome of a solver run, independent of the solver used."""

    OPTIMAL = "optimal"
    FEASIBLE = "feasible"  # Incumbent found, optimality not proven
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    TIME_LIMIT = "time_limit"
    ERROR = "error"


# =============================================================================
# Problem Instance
# =============================================================================


class TimeHorizon(BaseModel):
    """Contiguous hourly horizon numbered 1..T."""

    model_config = ConfigDict(frozen=True)

    num_hours: Annotated[int, Field(gt=0, description="Number of hours (T)")]

    @property
    def first(self) -> int:
        return 1

    @property
    def last(self) -> int:
        return self.num_hours

    @property
    def hours(self) -> range:
        """Hour indices 1..T in order."""
        return range(1, self.num_hours + 1)

    def contains(self, hour: int) -> bool:
        return 1 <= hour <= self.num_hours

    def window(self, start: int, duration: int) -> range:
        """Hours ``start .. start + duration - 1``, clamped to the horizon.

        Args:
            start: First hour of the window (must lie in the horizon).
            duration: Window length in hours (>= 1).

        Returns:
            Range of hours, never reaching past T or before hour 1.

        Raises:
            ValueError: If start is outside the horizon or duration < 1.
        """
        if not self.contains(start):
            raise ValueError(f"Hour {start} is outside the horizon 1..{self.num_hours}")
        if duration < 1:
            raise ValueError(f"Window duration must be >= 1, got {duration}")
        return range(max(start, 1), min(start + duration - 1, self.num_hours) + 1)


class FossilUnit(BaseModel):
    """Dispatchable fossil-fired generating unit.

    Units are identified by their position in ``ProblemInstance.units``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = "fossil"
    capacity_mw: Annotated[float, Field(gt=0, description="Maximum output (MW)")]
    generation_cost: CostPerMWh = 0.0
    startup_cost: Annotated[
        float, Field(ge=0, description="Cost per start-up ($)")
    ] = 0.0
    min_up_hours: DurationHours = 1
    min_down_hours: DurationHours = 1
    ramp_limit_mw: PowerMW | None = None  # None = no ramp constraint
    emission_factor: Annotated[
        float, Field(ge=0, description="Emissions per MWh generated (t/MWh)")
    ] = 0.0
    initially_on: bool = False  # Commitment state before hour 1


class RenewableProfile(BaseModel):
    """Hourly renewable availability (zero-fuel by default)."""

    model_config = ConfigDict(frozen=True)

    availability_mw: tuple[PowerMW, ...]
    cost_per_mwh: CostPerMWh = 0.0

    @property
    def total_available_mwh(self) -> float:
        return sum(self.availability_mw)


class DemandProfile(BaseModel):
    """Hourly system demand."""

    model_config = ConfigDict(frozen=True)

    demand_mw: Annotated[tuple[PowerMW, ...], Field(min_length=1)]

    @property
    def peak_mw(self) -> float:
        return max(self.demand_mw)


class BatteryConfig(BaseModel):
    """Battery Energy Storage System (BESS) configuration.

    A zero-capacity battery with zero power rating models a system
    without storage.
    """

    model_config = ConfigDict(frozen=True)

    capacity_mwh: EnergyMWh = 0.0
    max_power_mw: PowerMW = 0.0  # Charge and discharge limit
    efficiency: Efficiency = 1.0  # Applied on the way in and on the way out
    operating_cost_per_mwh: CostPerMWh = 0.0
    initial_soc_mwh: EnergyMWh = 0.0  # State of charge fixed at hour 1

    @model_validator(mode="after")
    def _check_initial_soc(self) -> "BatteryConfig":
        if self.initial_soc_mwh > self.capacity_mwh:
            raise ValueError(
                f"initial_soc_mwh ({self.initial_soc_mwh}) exceeds "
                f"capacity_mwh ({self.capacity_mwh})"
            )
        return self


class ReliabilityPolicy(BaseModel):
    """System-wide reliability and environmental limits."""

    model_config = ConfigDict(frozen=True)

    reserve_fraction: Fraction = 0.0  # Spinning reserve as share of demand
    emission_cap: Annotated[float, Field(ge=0)] | None = None  # None = uncapped


class ProblemInstance(BaseModel):
    """Complete, immutable description of one day-ahead dispatch problem.

    Per-hour arrays must all have the horizon's length; the horizon length
    is taken from the demand profile.
    """

    model_config = ConfigDict(frozen=True)

    name: str = "day_ahead"
    units: tuple[FossilUnit, ...] = ()
    demand: DemandProfile
    renewables: RenewableProfile | None = None  # None = no renewable fleet
    battery: BatteryConfig = Field(default_factory=BatteryConfig)
    policy: ReliabilityPolicy = Field(default_factory=ReliabilityPolicy)

    @model_validator(mode="after")
    def _check_profile_lengths(self) -> "ProblemInstance":
        if self.renewables is not None:
            n_renewable = len(self.renewables.availability_mw)
            if n_renewable != self.num_hours:
                raise ValueError(
                    f"Renewable profile has {n_renewable} hours but demand "
                    f"profile has {self.num_hours}"
                )
        return self

    @property
    def num_hours(self) -> int:
        return len(self.demand.demand_mw)

    @property
    def horizon(self) -> TimeHorizon:
        return TimeHorizon(num_hours=self.num_hours)

    @property
    def hours(self) -> range:
        return self.horizon.hours

    @property
    def unit_indices(self) -> range:
        return range(len(self.units))

    @property
    def renewable_cost(self) -> float:
        return self.renewables.cost_per_mwh if self.renewables is not None else 0.0

    @property
    def total_fossil_capacity_mw(self) -> float:
        return sum(unit.capacity_mw for unit in self.units)

    def demand_at(self, hour: int) -> float:
        """Demand in MW for a 1-indexed hour."""
        self._check_hour(hour)
        return self.demand.demand_mw[hour - 1]

    def availability_at(self, hour: int) -> float:
        """Renewable availability in MW for a 1-indexed hour."""
        self._check_hour(hour)
        if self.renewables is None:
            return 0.0
        return self.renewables.availability_mw[hour - 1]

    def _check_hour(self, hour: int) -> None:
        if not self.horizon.contains(hour):
            raise ValueError(f"Hour {hour} is outside the horizon 1..{self.num_hours}")


# =============================================================================
# Schedule (solver output)
# =============================================================================


class UnitDispatch(BaseModel):
    """Operating point of one fossil unit in one hour."""

    model_config = ConfigDict(frozen=True)

    unit_index: Annotated[int, Field(ge=0)]
    name: str
    committed: bool
    generation_mw: PowerMW
    start_up: bool = False
    shut_down: bool = False


class HourlyDispatch(BaseModel):
    """System operating point for a single hour."""

    model_config = ConfigDict(frozen=True)

    hour: Annotated[int, Field(ge=1)]
    demand_mw: PowerMW
    units: tuple[UnitDispatch, ...]
    renewable_used_mw: PowerMW
    curtailed_mw: PowerMW
    charge_mw: PowerMW = 0.0
    discharge_mw: PowerMW = 0.0
    soc_mwh: EnergyMWh = 0.0

    @property
    def fossil_generation_mw(self) -> float:
        return sum(u.generation_mw for u in self.units)

    @property
    def committed_units(self) -> list[int]:
        return [u.unit_index for u in self.units if u.committed]

    @property
    def net_supply_mw(self) -> float:
        """Supply delivered to load: fossil + renewable + discharge - charge."""
        return (
            self.fossil_generation_mw
            + self.renewable_used_mw
            + self.discharge_mw
            - self.charge_mw
        )

    def validate_power_balance(self, tolerance: float = 1e-3) -> bool:
        """Check that supply meets demand within tolerance."""
        return abs(self.net_supply_mw - self.demand_mw) <= tolerance


class CostBreakdown(BaseModel):
    """Objective value split by cost component."""

    model_config = ConfigDict(frozen=True)

    generation: float = 0.0
    startup: float = 0.0
    storage: float = 0.0
    renewable: float = 0.0

    @property
    def total(self) -> float:
        return self.generation + self.startup + self.storage + self.renewable


class Schedule(BaseModel):
    """Hour-by-hour operational schedule produced from an optimal solve."""

    model_config = ConfigDict(frozen=True)

    status: SolveStatus
    total_cost: float
    costs: CostBreakdown = Field(default_factory=CostBreakdown)
    hours: tuple[HourlyDispatch, ...]

    @property
    def num_hours(self) -> int:
        return len(self.hours)

    def at(self, hour: int) -> HourlyDispatch:
        """Dispatch for a 1-indexed hour."""
        if not 1 <= hour <= self.num_hours:
            raise ValueError(f"Hour {hour} is outside the schedule 1..{self.num_hours}")
        return self.hours[hour - 1]

    def commitment(self, unit_index: int) -> list[bool]:
        """On/off series for one unit across the horizon."""
        return [h.units[unit_index].committed for h in self.hours]

    def generation(self, unit_index: int) -> list[float]:
        """Output series (MW) for one unit across the horizon."""
        return [h.units[unit_index].generation_mw for h in self.hours]

    @property
    def total_fossil_generation_mwh(self) -> float:
        return sum(h.fossil_generation_mw for h in self.hours)

    @property
    def total_renewable_used_mwh(self) -> float:
        return sum(h.renewable_used_mw for h in self.hours)

    @property
    def total_curtailed_mwh(self) -> float:
        return sum(h.curtailed_mw for h in self.hours)

    @property
    def curtailment_rate(self) -> float:
        """Percentage of available renewable energy that was curtailed."""
        available = self.total_renewable_used_mwh + self.total_curtailed_mwh
        if available == 0:
            return 0.0
        return (self.total_curtailed_mwh / available) * 100

    @property
    def startup_count(self) -> int:
        return sum(1 for h in self.hours for u in h.units if u.start_up)


class DispatchOutcome(BaseModel):
    """Result of formulating and solving one problem instance.

    ``schedule`` is only present when the solver proved optimality;
    every other status is reported here without a schedule.
    """

    model_config = ConfigDict(frozen=True)

    instance_name: str = ""
    status: SolveStatus
    termination_condition: str = ""
    solver_name: str = ""
    objective_value: float | None = None
    solve_time_seconds: Annotated[float, Field(ge=0)] = 0.0
    schedule: Schedule | None = None

    @property
    def is_optimal(self) -> bool:
        return self.status == SolveStatus.OPTIMAL and self.schedule is not None

    def require_schedule(self) -> Schedule:
        """Return the schedule, or fail loudly when there is none."""
        if self.schedule is None:
            raise RuntimeError(
                f"No schedule available: solver reported '{self.status.value}' "
                f"({self.termination_condition})"
            )
        return self.schedule
