"""Demo for the day-ahead unit commitment engine.

Builds the reference system (base unit + peaker, renewable fleet, 50 MWh
battery) with seeded random demand and renewable availability, solves it,
and prints the hourly schedule.

Usage:
    python -m uc_engine.demo --seed 42 --plot dispatch.png

Or in Python:
    from uc_engine.demo import run_reference_demo
    outcome = run_reference_demo(DemoConfig(seed=7))
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path

from uc_engine.domain.models import DispatchOutcome, ProblemInstance, ReliabilityPolicy
from uc_engine.generators import InstanceGenerator, reference_battery, reference_units
from uc_engine.logging_setup import configure_logging
from uc_engine.optimization import OptimizationConfig, UnitCommitmentOptimizer
from uc_engine.reporting import format_outcome

logger = logging.getLogger(__name__)


@dataclass
class DemoConfig:
    """Configuration for the reference demo.

    Attributes:
        horizon_hours: Planning horizon in hours.
        seed: Random seed for demand and renewable profiles.
        reserve_fraction: Spinning reserve as a share of demand.
        emission_cap: Horizon-wide emission cap in tonnes (None = uncapped).
        solver_name: Preferred MILP solver.
        time_limit_seconds: Solver time limit.
    """

    horizon_hours: int = 24
    seed: int = 42
    reserve_fraction: float = 0.0
    emission_cap: float | None = None
    solver_name: str = "appsi_highs"
    time_limit_seconds: float = 60.0


def build_demo_instance(config: DemoConfig) -> ProblemInstance:
    """Reference instance with the demo's policy applied."""
    generator = InstanceGenerator(seed=config.seed)
    return generator.generate(
        num_hours=config.horizon_hours,
        units=reference_units(),
        battery=reference_battery(),
        policy=ReliabilityPolicy(
            reserve_fraction=config.reserve_fraction,
            emission_cap=config.emission_cap,
        ),
        name=f"reference_seed{config.seed}",
    )


def run_reference_demo(
    config: DemoConfig | None = None,
) -> tuple[ProblemInstance, DispatchOutcome]:
    """Solve the reference instance.

    Args:
        config: Demo configuration. Uses defaults if None.

    Returns:
        Tuple of (instance, outcome).
    """
    config = config or DemoConfig()
    instance = build_demo_instance(config)
    optimizer = UnitCommitmentOptimizer(
        OptimizationConfig(
            solver_name=config.solver_name,
            time_limit_seconds=config.time_limit_seconds,
        )
    )
    outcome = optimizer.optimize(instance)
    return instance, outcome


def main() -> None:
    """Run the demo from the command line."""
    parser = argparse.ArgumentParser(
        description="Day-ahead unit commitment demo on the reference system"
    )
    parser.add_argument(
        "--hours",
        type=int,
        default=24,
        help="Planning horizon in hours (default: 24)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for demand and renewables (default: 42)",
    )
    parser.add_argument(
        "--reserve",
        type=float,
        default=0.0,
        help="Spinning reserve fraction of demand (default: 0)",
    )
    parser.add_argument(
        "--emission-cap",
        type=float,
        default=None,
        help="Horizon-wide emission cap in tonnes (default: none)",
    )
    parser.add_argument(
        "--solver",
        type=str,
        default="appsi_highs",
        help="Preferred Pyomo solver name (default: appsi_highs)",
    )
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Save a dispatch dashboard to this path",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    config = DemoConfig(
        horizon_hours=args.hours,
        seed=args.seed,
        reserve_fraction=args.reserve,
        emission_cap=args.emission_cap,
        solver_name=args.solver,
    )
    instance, outcome = run_reference_demo(config)
    print(format_outcome(outcome))

    if args.plot and outcome.schedule is not None:
        from uc_engine.visualization import create_dispatch_timeline

        path = Path(args.plot)
        path.parent.mkdir(parents=True, exist_ok=True)
        create_dispatch_timeline(
            outcome.schedule,
            battery_capacity_mwh=instance.battery.capacity_mwh,
            title=f"Day-Ahead Dispatch ({instance.name})",
            save_path=path,
        )
        logger.info("Dispatch dashboard saved to %s", path)


if __name__ == "__main__":
    main()
