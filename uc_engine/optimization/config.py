"""Solver and interpretation settings for the unit commitment optimizer."""

from dataclasses import dataclass


@dataclass
class OptimizationConfig:
    """Configuration for the MILP optimizer."""

    # Solver settings
    solver_name: str = "appsi_highs"  # 'appsi_highs', 'glpk', 'cbc', 'gurobi', 'cplex'
    fallback_solvers: tuple[str, ...] = ("glpk", "cbc")
    time_limit_seconds: float = 60.0
    mip_gap: float = 1e-4  # 0.01% optimality gap
    tee: bool = False  # Stream solver output

    # Result interpretation
    round_decimals: int = 6  # Strips solver noise such as 1e-12 MW

    def validate(self) -> bool:
        """Validate configuration."""
        return (
            self.time_limit_seconds > 0
            and 0 <= self.mip_gap < 1
            and self.round_decimals >= 0
        )
