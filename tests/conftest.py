"""Test fixtures for reproducible unit commitment scenarios.

Provides standard instances:
- Single-unit flat demand (scenario A)
- Unservable peak (scenario B)
- Battery arbitrage with a renewable surplus
- Reference system with seeded random profiles
"""

import pytest

from uc_engine.domain.models import (
    BatteryConfig,
    DemandProfile,
    FossilUnit,
    ProblemInstance,
    ReliabilityPolicy,
    RenewableProfile,
)
from uc_engine.generators import reference_instance
from uc_engine.optimization import OptimizationConfig, SolverAdapter


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "solver: test needs a working MILP solver (HiGHS, GLPK or CBC)"
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip solver tests when no MILP solver is installed."""
    if SolverAdapter().is_available():
        return
    skip_solver = pytest.mark.skip(reason="No MILP solver available")
    for item in items:
        if "solver" in item.keywords:
            item.add_marker(skip_solver)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def optimization_config() -> OptimizationConfig:
    """Default solver settings with a short time limit."""
    return OptimizationConfig(time_limit_seconds=30.0)


# =============================================================================
# Unit Fixtures
# =============================================================================


@pytest.fixture
def base_unit() -> FossilUnit:
    """100 MW unit at $50/MWh with no temporal limits."""
    return FossilUnit(name="base", capacity_mw=100.0, generation_cost=50.0)


@pytest.fixture
def flexible_unit() -> FossilUnit:
    """Unit with every attribute set, for formulation tests."""
    return FossilUnit(
        name="flex",
        capacity_mw=80.0,
        generation_cost=70.0,
        startup_cost=300.0,
        min_up_hours=3,
        min_down_hours=2,
        ramp_limit_mw=30.0,
        emission_factor=0.5,
    )


@pytest.fixture
def demo_battery() -> BatteryConfig:
    """50 MWh / 20 MW battery at 90% efficiency."""
    return BatteryConfig(
        capacity_mwh=50.0,
        max_power_mw=20.0,
        efficiency=0.9,
        operating_cost_per_mwh=1.0,
    )


# =============================================================================
# Instance Fixtures
# =============================================================================


@pytest.fixture
def flat_demand_instance(base_unit: FossilUnit) -> ProblemInstance:
    """Scenario A: one unit, constant 80 MW demand, nothing else."""
    return ProblemInstance(
        name="scenario_a",
        units=(base_unit,),
        demand=DemandProfile(demand_mw=[80.0] * 24),
    )


@pytest.fixture
def unservable_instance(base_unit: FossilUnit) -> ProblemInstance:
    """Scenario B: hour 12 demand exceeds every source combined."""
    demand = [60.0] * 24
    demand[11] = 200.0  # 100 fossil + 30 renewable + 20 battery < 200
    return ProblemInstance(
        name="scenario_b",
        units=(base_unit,),
        demand=DemandProfile(demand_mw=demand),
        renewables=RenewableProfile(availability_mw=[30.0] * 24),
        battery=BatteryConfig(capacity_mwh=50.0, max_power_mw=20.0, efficiency=0.9),
    )


@pytest.fixture
def surplus_instance(base_unit: FossilUnit, demo_battery: BatteryConfig) -> ProblemInstance:
    """Free renewable surplus in the morning, fossil-only evening."""
    availability = [60.0] * 6 + [0.0] * 18
    return ProblemInstance(
        name="surplus",
        units=(base_unit,),
        demand=DemandProfile(demand_mw=[30.0] * 24),
        renewables=RenewableProfile(availability_mw=availability),
        battery=demo_battery,
    )


@pytest.fixture
def mixed_instance(
    base_unit: FossilUnit, flexible_unit: FossilUnit, demo_battery: BatteryConfig
) -> ProblemInstance:
    """Two units, renewables, battery, reserve and emission cap."""
    demand = [70.0 + 40.0 * ((h % 12) / 11) for h in range(24)]
    availability = [max(0.0, 50.0 - abs(h - 12) * 6.0) for h in range(24)]
    return ProblemInstance(
        name="mixed",
        units=(base_unit, flexible_unit),
        demand=DemandProfile(demand_mw=demand),
        renewables=RenewableProfile(availability_mw=availability),
        battery=demo_battery,
        policy=ReliabilityPolicy(reserve_fraction=0.1, emission_cap=1500.0),
    )


@pytest.fixture
def seeded_reference_instance() -> ProblemInstance:
    """Reference system with seed 7."""
    return reference_instance(seed=7)
