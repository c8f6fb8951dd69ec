"""Solver adapter around Pyomo's SolverFactory.

Accepts an assembled model, runs whichever MILP solver is configured (or the
first available fallback), and returns a solver-independent ``SolveResult``.
Infeasible, unbounded and time-limited runs are results, not exceptions.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any

import pyomo.environ as pyo
from pyomo.opt import SolverFactory, SolverStatus, TerminationCondition

from uc_engine.domain.models import SolveStatus
from uc_engine.optimization.config import OptimizationConfig
from uc_engine.optimization.variables import VariableRegistry

logger = logging.getLogger(__name__)

# (time limit option, relative MIP gap option) per solver
_OPTION_NAMES: dict[str, tuple[str, str]] = {
    "appsi_highs": ("time_limit", "mip_rel_gap"),
    "highs": ("time_limit", "mip_rel_gap"),
    "glpk": ("tmlim", "mipgap"),
    "cbc": ("seconds", "ratioGap"),
    "gurobi": ("TimeLimit", "MIPGap"),
    "cplex": ("timelimit", "mipgap"),
}

_STATUS_BY_TERMINATION: dict[Any, SolveStatus] = {
    TerminationCondition.optimal: SolveStatus.OPTIMAL,
    TerminationCondition.globallyOptimal: SolveStatus.OPTIMAL,
    TerminationCondition.feasible: SolveStatus.FEASIBLE,
    TerminationCondition.infeasible: SolveStatus.INFEASIBLE,
    # Every variable in the formulation is bounded, so this cannot be unbounded.
    TerminationCondition.infeasibleOrUnbounded: SolveStatus.INFEASIBLE,
    TerminationCondition.unbounded: SolveStatus.UNBOUNDED,
    TerminationCondition.maxTimeLimit: SolveStatus.TIME_LIMIT,
}


@dataclass
class SolveResult:
    """Raw outcome of one solver run."""

    status: SolveStatus
    solver_name: str
    solver_status: str
    termination_condition: str
    objective_value: float | None
    solve_time_seconds: float

    # Variable values by name, then index; empty unless a solution was loaded
    values: dict[str, dict[Any, float]] = field(default_factory=dict)

    @property
    def has_solution(self) -> bool:
        return bool(self.values)


def classify_termination(solver_status: Any, termination: Any) -> SolveStatus:
    """Map Pyomo's solver status and termination condition onto SolveStatus."""
    status = _STATUS_BY_TERMINATION.get(termination, SolveStatus.ERROR)
    if status == SolveStatus.OPTIMAL and solver_status not in (
        SolverStatus.ok,
        SolverStatus.warning,
    ):
        return SolveStatus.ERROR
    return status


class SolverAdapter:
    """Runs a MILP solver on an assembled unit commitment model."""

    def __init__(self, config: OptimizationConfig | None = None) -> None:
        """Initialize the adapter.

        Args:
            config: Optimization configuration. Uses defaults if None.
        """
        self.config = config or OptimizationConfig()

    def candidate_solvers(self) -> list[str]:
        names = [self.config.solver_name]
        names.extend(n for n in self.config.fallback_solvers if n not in names)
        return names

    def resolve_solver(self) -> tuple[str, Any]:
        """Pick the configured solver, or the first available fallback.

        Returns:
            Tuple of (solver name, Pyomo solver object).

        Raises:
            RuntimeError: If none of the candidate solvers is available.
        """
        for name in self.candidate_solvers():
            solver = SolverFactory(name)
            if solver is not None and solver.available(exception_flag=False):
                if name != self.config.solver_name:
                    logger.warning(
                        "Solver '%s' not available, falling back to '%s'",
                        self.config.solver_name,
                        name,
                    )
                return name, solver

        raise RuntimeError(
            f"No MILP solver available (tried: {', '.join(self.candidate_solvers())})."
        )

    def is_available(self) -> bool:
        """Check whether any candidate solver can be used."""
        try:
            self.resolve_solver()
        except RuntimeError:
            return False
        return True

    def _apply_options(self, name: str, solver: Any) -> None:
        option_names = _OPTION_NAMES.get(name)
        if option_names is None:
            logger.debug("No option mapping for solver '%s'; using its defaults", name)
            return

        time_option, gap_option = option_names
        time_limit: float = self.config.time_limit_seconds
        if name == "glpk":
            time_limit = int(math.ceil(time_limit))
        solver.options[time_option] = time_limit
        solver.options[gap_option] = self.config.mip_gap

    def solve(self, model: pyo.ConcreteModel, registry: VariableRegistry) -> SolveResult:
        """Solve the model and collect a value for every registered variable.

        Args:
            model: Model with variables, objective and constraints attached.
            registry: Registry that declared the model's variables.

        Returns:
            SolveResult with status and, when a solution exists, values.

        Raises:
            RuntimeError: If no solver is available.
        """
        name, solver = self.resolve_solver()
        self._apply_options(name, solver)

        start_time = time.perf_counter()
        results = solver.solve(model, tee=self.config.tee, load_solutions=False)
        solve_time = time.perf_counter() - start_time

        solver_status = results.solver.status
        termination = results.solver.termination_condition
        status = classify_termination(solver_status, termination)

        result = SolveResult(
            status=status,
            solver_name=name,
            solver_status=str(solver_status),
            termination_condition=str(termination),
            objective_value=None,
            solve_time_seconds=solve_time,
        )

        if status in (SolveStatus.OPTIMAL, SolveStatus.FEASIBLE):
            model.solutions.load_from(results)
            result.values = registry.extract_values(model)
            result.objective_value = pyo.value(model.total_cost)

        logger.info(
            "Solved with %s in %.2fs: %s (%s)",
            name,
            solve_time,
            status.value,
            termination,
        )
        return result
