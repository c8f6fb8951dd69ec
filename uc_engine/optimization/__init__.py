"""Optimization module for MILP-based unit commitment and dispatch."""

from uc_engine.optimization.config import OptimizationConfig
from uc_engine.optimization.constraints import ConstraintGenerator
from uc_engine.optimization.interpreter import ResultInterpreter
from uc_engine.optimization.milp import (
    UnitCommitmentOptimizer,
    formulate,
    solve_instance,
)
from uc_engine.optimization.objective import build_objective, cost_breakdown
from uc_engine.optimization.solver import SolveResult, SolverAdapter
from uc_engine.optimization.variables import VariableRegistry

__all__ = [
    "ConstraintGenerator",
    "OptimizationConfig",
    "ResultInterpreter",
    "SolveResult",
    "SolverAdapter",
    "UnitCommitmentOptimizer",
    "VariableRegistry",
    "build_objective",
    "cost_breakdown",
    "formulate",
    "solve_instance",
]
