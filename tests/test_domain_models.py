"""Tests for domain models."""

import pytest
from pydantic import ValidationError

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


class TestTimeHorizon:
    """Tests for TimeHorizon."""

    def test_hours_are_one_indexed(self) -> None:
        """Test that hours run 1..T without gaps."""
        horizon = TimeHorizon(num_hours=24)
        assert list(horizon.hours) == list(range(1, 25))
        assert horizon.first == 1
        assert horizon.last == 24

    def test_empty_horizon_rejected(self) -> None:
        """Test that a zero-length horizon is invalid."""
        with pytest.raises(ValidationError):
            TimeHorizon(num_hours=0)

    def test_window_clamped_to_last_hour(self) -> None:
        """Test that windows never reach past T."""
        horizon = TimeHorizon(num_hours=24)
        assert list(horizon.window(5, 3)) == [5, 6, 7]
        assert list(horizon.window(23, 4)) == [23, 24]
        assert list(horizon.window(24, 1)) == [24]

    def test_window_rejects_bad_input(self) -> None:
        """Test that out-of-horizon starts and zero durations fail."""
        horizon = TimeHorizon(num_hours=24)
        with pytest.raises(ValueError):
            horizon.window(0, 3)
        with pytest.raises(ValueError):
            horizon.window(25, 1)
        with pytest.raises(ValueError):
            horizon.window(3, 0)


class TestFossilUnit:
    """Tests for FossilUnit."""

    def test_defaults(self) -> None:
        """Test default unit attributes."""
        unit = FossilUnit(capacity_mw=100.0)
        assert unit.min_up_hours == 1
        assert unit.min_down_hours == 1
        assert unit.ramp_limit_mw is None
        assert unit.initially_on is False

    @pytest.mark.parametrize("capacity", [0.0, -10.0])
    def test_non_positive_capacity_rejected(self, capacity: float) -> None:
        """Test that capacity must be strictly positive."""
        with pytest.raises(ValidationError):
            FossilUnit(capacity_mw=capacity)

    def test_min_up_time_must_be_positive(self) -> None:
        """Test that minimum durations are at least one hour."""
        with pytest.raises(ValidationError):
            FossilUnit(capacity_mw=50.0, min_up_hours=0)

    def test_negative_costs_rejected(self) -> None:
        """Test that costs cannot be negative."""
        with pytest.raises(ValidationError):
            FossilUnit(capacity_mw=50.0, generation_cost=-1.0)
        with pytest.raises(ValidationError):
            FossilUnit(capacity_mw=50.0, startup_cost=-1.0)

    def test_unit_is_immutable(self) -> None:
        """Test that units are frozen."""
        unit = FossilUnit(capacity_mw=100.0)
        with pytest.raises(ValidationError):
            unit.capacity_mw = 200.0  # type: ignore[misc]


class TestBatteryConfig:
    """Tests for BatteryConfig."""

    def test_default_is_no_storage(self) -> None:
        """Test that the default battery stores nothing."""
        battery = BatteryConfig()
        assert battery.capacity_mwh == 0.0
        assert battery.max_power_mw == 0.0

    @pytest.mark.parametrize("efficiency", [0.0, -0.1, 1.01])
    def test_efficiency_bounds(self, efficiency: float) -> None:
        """Test that efficiency must lie in (0, 1]."""
        with pytest.raises(ValidationError):
            BatteryConfig(capacity_mwh=10.0, max_power_mw=5.0, efficiency=efficiency)

    def test_perfect_efficiency_allowed(self) -> None:
        """Test that a lossless battery is valid."""
        assert BatteryConfig(efficiency=1.0).efficiency == 1.0

    def test_initial_soc_above_capacity_rejected(self) -> None:
        """Test that the initial state of charge fits the battery."""
        with pytest.raises(ValidationError):
            BatteryConfig(capacity_mwh=10.0, initial_soc_mwh=12.0)


class TestReliabilityPolicy:
    """Tests for ReliabilityPolicy."""

    def test_reserve_fraction_bounds(self) -> None:
        """Test that reserve fraction lies in [0, 1]."""
        with pytest.raises(ValidationError):
            ReliabilityPolicy(reserve_fraction=1.5)

    def test_negative_cap_rejected(self) -> None:
        """Test that the emission cap is non-negative."""
        with pytest.raises(ValidationError):
            ReliabilityPolicy(emission_cap=-1.0)


class TestProblemInstance:
    """Tests for ProblemInstance."""

    def test_horizon_from_demand(self, flat_demand_instance: ProblemInstance) -> None:
        """Test that the horizon length follows the demand profile."""
        assert flat_demand_instance.num_hours == 24
        assert list(flat_demand_instance.hours) == list(range(1, 25))

    def test_empty_demand_rejected(self) -> None:
        """Test that an empty horizon cannot be constructed."""
        with pytest.raises(ValidationError):
            DemandProfile(demand_mw=[])

    def test_mismatched_renewable_length_rejected(self) -> None:
        """Test that per-hour arrays must share the horizon length."""
        with pytest.raises(ValueError, match="Renewable profile has 23 hours"):
            ProblemInstance(
                units=(FossilUnit(capacity_mw=100.0),),
                demand=DemandProfile(demand_mw=[50.0] * 24),
                renewables=RenewableProfile(availability_mw=[10.0] * 23),
            )

    def test_negative_demand_rejected(self) -> None:
        """Test that demand must be non-negative."""
        with pytest.raises(ValidationError):
            DemandProfile(demand_mw=[50.0, -1.0])

    def test_hour_accessors(self) -> None:
        """Test 1-indexed demand and availability lookups."""
        instance = ProblemInstance(
            demand=DemandProfile(demand_mw=[10.0, 20.0, 30.0]),
            renewables=RenewableProfile(availability_mw=[1.0, 2.0, 3.0]),
        )
        assert instance.demand_at(1) == 10.0
        assert instance.demand_at(3) == 30.0
        assert instance.availability_at(2) == 2.0
        with pytest.raises(ValueError):
            instance.demand_at(0)
        with pytest.raises(ValueError):
            instance.availability_at(4)

    def test_no_renewables_means_zero_availability(
        self, flat_demand_instance: ProblemInstance
    ) -> None:
        """Test that a missing renewable profile is zero everywhere."""
        assert flat_demand_instance.availability_at(5) == 0.0
        assert flat_demand_instance.renewable_cost == 0.0


def _hour(hour: int, generation: float, committed: bool = True) -> HourlyDispatch:
    return HourlyDispatch(
        hour=hour,
        demand_mw=generation + 10.0,
        units=(
            UnitDispatch(
                unit_index=0,
                name="base",
                committed=committed,
                generation_mw=generation,
            ),
        ),
        renewable_used_mw=10.0,
        curtailed_mw=5.0,
    )


class TestSchedule:
    """Tests for Schedule and HourlyDispatch."""

    def test_power_balance_validation(self) -> None:
        """Test the per-hour balance check."""
        hour = _hour(1, 40.0)
        assert hour.fossil_generation_mw == 40.0
        assert hour.validate_power_balance()

        unbalanced = hour.model_copy(update={"demand_mw": 60.0})
        assert not unbalanced.validate_power_balance()

    def test_series_accessors(self) -> None:
        """Test per-unit series and totals."""
        schedule = Schedule(
            status=SolveStatus.OPTIMAL,
            total_cost=100.0,
            hours=(_hour(1, 40.0), _hour(2, 0.0, committed=False)),
        )
        assert schedule.commitment(0) == [True, False]
        assert schedule.generation(0) == [40.0, 0.0]
        assert schedule.total_fossil_generation_mwh == 40.0
        assert schedule.total_curtailed_mwh == 10.0
        assert schedule.curtailment_rate == pytest.approx(100 * 10.0 / 30.0)
        assert schedule.at(2).hour == 2
        with pytest.raises(ValueError):
            schedule.at(3)

    def test_cost_breakdown_total(self) -> None:
        """Test that the breakdown sums its components."""
        costs = CostBreakdown(generation=100.0, startup=20.0, storage=5.0)
        assert costs.total == 125.0


class TestDispatchOutcome:
    """Tests for DispatchOutcome."""

    def test_non_optimal_has_no_schedule(self) -> None:
        """Test that a diagnostic outcome reports its status explicitly."""
        outcome = DispatchOutcome(
            status=SolveStatus.INFEASIBLE, termination_condition="infeasible"
        )
        assert not outcome.is_optimal
        assert outcome.schedule is None
        with pytest.raises(RuntimeError, match="infeasible"):
            outcome.require_schedule()
