"""Synthetic problem instance generator.

Produces randomized day-ahead instances for demos and tests:
- Renewable availability drawn uniformly from whole MW in [0, 80]
- Demand drawn uniformly from whole MW in [50, 120]
- Reproducible via numpy.random.Generator seeds, or an injected generator
"""

import numpy as np
from numpy.random import Generator

from uc_engine.domain.models import (
    BatteryConfig,
    DemandProfile,
    FossilUnit,
    ProblemInstance,
    ReliabilityPolicy,
    RenewableProfile,
)


def reference_units(include_peaker: bool = True) -> tuple[FossilUnit, ...]:
    """Fossil fleet of the reference system.

    The base unit alone (100 MW) cannot cover a 120 MW hour with no wind
    and an empty battery, so a small peaker is added by default.
    """
    base = FossilUnit(
        name="base",
        capacity_mw=100.0,
        generation_cost=50.0,
        emission_factor=0.4,
    )
    if not include_peaker:
        return (base,)

    peaker = FossilUnit(
        name="peaker",
        capacity_mw=40.0,
        generation_cost=120.0,
        startup_cost=200.0,
        min_up_hours=2,
        min_down_hours=2,
        ramp_limit_mw=40.0,
        emission_factor=0.6,
    )
    return base, peaker


def reference_battery() -> BatteryConfig:
    """50 MWh / 20 MW battery at 90% efficiency, $10/MWh cycled."""
    return BatteryConfig(
        capacity_mwh=50.0,
        max_power_mw=20.0,
        efficiency=0.9,
        operating_cost_per_mwh=10.0,
    )


class InstanceGenerator:
    """Generates synthetic problem instances.

    All power values are in MW.
    """

    def __init__(
        self,
        seed: int | None = None,
        rng: Generator | None = None,
        renewable_range_mw: tuple[int, int] = (0, 80),
        demand_range_mw: tuple[int, int] = (50, 120),
    ) -> None:
        """Initialize the instance generator.

        Args:
            seed: Random seed for reproducibility. Ignored if rng is given.
            rng: Random generator to draw from.
            renewable_range_mw: Inclusive (low, high) renewable availability.
            demand_range_mw: Inclusive (low, high) hourly demand.
        """
        self._rng: Generator = rng if rng is not None else np.random.default_rng(seed)
        self.renewable_range_mw = renewable_range_mw
        self.demand_range_mw = demand_range_mw

    def _draw(self, bounds: tuple[int, int], num_hours: int) -> tuple[float, ...]:
        low, high = bounds
        draws = self._rng.integers(low, high, size=num_hours, endpoint=True)
        return tuple(float(v) for v in draws)

    def renewable_profile(
        self, num_hours: int = 24, cost_per_mwh: float = 0.0
    ) -> RenewableProfile:
        """Draw an hourly renewable availability profile."""
        return RenewableProfile(
            availability_mw=self._draw(self.renewable_range_mw, num_hours),
            cost_per_mwh=cost_per_mwh,
        )

    def demand_profile(self, num_hours: int = 24) -> DemandProfile:
        """Draw an hourly demand profile."""
        return DemandProfile(demand_mw=self._draw(self.demand_range_mw, num_hours))

    def generate(
        self,
        num_hours: int = 24,
        units: tuple[FossilUnit, ...] | None = None,
        battery: BatteryConfig | None = None,
        policy: ReliabilityPolicy | None = None,
        name: str = "synthetic",
    ) -> ProblemInstance:
        """Generate a complete problem instance.

        Args:
            num_hours: Horizon length in hours.
            units: Fossil fleet. Defaults to the reference fleet.
            battery: Battery. Defaults to the reference battery.
            policy: Reliability policy. Defaults to no reserve and no cap.
            name: Instance name.

        Returns:
            ProblemInstance with random demand and renewable availability.
        """
        renewables = self.renewable_profile(num_hours)
        demand = self.demand_profile(num_hours)
        return ProblemInstance(
            name=name,
            units=units if units is not None else reference_units(),
            demand=demand,
            renewables=renewables,
            battery=battery if battery is not None else reference_battery(),
            policy=policy if policy is not None else ReliabilityPolicy(),
        )


def reference_instance(seed: int | None = None, num_hours: int = 24) -> ProblemInstance:
    """Reference system with seeded random demand and renewables."""
    return InstanceGenerator(seed=seed).generate(num_hours=num_hours, name="reference")
