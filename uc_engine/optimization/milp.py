"""MILP formulation and solve pipeline for day-ahead unit commitment.

Indices:
- t ∈ T = {1..24}: hourly time steps
- f ∈ F: fossil units

The pipeline runs strictly forward:
    ProblemInstance -> VariableRegistry / objective / ConstraintGenerator
                    -> SolverAdapter -> ResultInterpreter

See ``variables``, ``objective`` and ``constraints`` for the full model.
"""

import logging

import pyomo.environ as pyo

from uc_engine.domain.models import DispatchOutcome, ProblemInstance
from uc_engine.optimization.config import OptimizationConfig
from uc_engine.optimization.constraints import ConstraintGenerator
from uc_engine.optimization.interpreter import ResultInterpreter
from uc_engine.optimization.objective import build_objective
from uc_engine.optimization.solver import SolverAdapter, SolveResult
from uc_engine.optimization.variables import VariableRegistry

logger = logging.getLogger(__name__)


def formulate(instance: ProblemInstance) -> tuple[pyo.ConcreteModel, VariableRegistry]:
    """Translate a problem instance into a fresh Pyomo model.

    Args:
        instance: Problem instance to formulate.

    Returns:
        Tuple of (model ready for solving, registry that declared its variables).
    """
    model = pyo.ConcreteModel(name=f"UnitCommitment[{instance.name}]")
    registry = VariableRegistry(instance)
    registry.declare(model)
    build_objective(model, instance)
    ConstraintGenerator(instance).generate(model)

    logger.info(
        "Formulated '%s': %d units, %d hours, %d variables",
        instance.name,
        len(instance.units),
        instance.num_hours,
        sum(len(var) for var in model.component_objects(pyo.Var)),
    )
    return model, registry


class UnitCommitmentOptimizer:
    """Mixed-Integer Linear Programming optimizer for unit commitment.

    Uses Pyomo to formulate and solve the day-ahead commitment and dispatch
    problem. Every ``build_model`` call starts from a fresh model, so one
    optimizer can be reused across instances.
    """

    def __init__(self, config: OptimizationConfig | None = None) -> None:
        """Initialize the optimizer.

        Args:
            config: Optimization configuration. Uses defaults if None.
        """
        self.config = config or OptimizationConfig()
        self._instance: ProblemInstance | None = None
        self._model: pyo.ConcreteModel | None = None
        self._registry: VariableRegistry | None = None
        self._result: SolveResult | None = None

    @property
    def model(self) -> pyo.ConcreteModel | None:
        return self._model

    @property
    def last_result(self) -> SolveResult | None:
        """Raw result of the most recent solve."""
        return self._result

    def build_model(self, instance: ProblemInstance) -> pyo.ConcreteModel:
        """Build the Pyomo optimization model.

        Args:
            instance: Problem instance to formulate.

        Returns:
            Pyomo ConcreteModel ready for solving.
        """
        self._model, self._registry = formulate(instance)
        self._instance = instance
        self._result = None
        return self._model

    def solve(self) -> DispatchOutcome:
        """Solve the built model and interpret the result.

        Returns:
            DispatchOutcome; non-optimal outcomes carry no schedule.

        Raises:
            RuntimeError: If model not built or no solver is available.
        """
        if self._model is None or self._registry is None or self._instance is None:
            raise RuntimeError("Model not built. Call build_model() first.")

        self._result = SolverAdapter(self.config).solve(self._model, self._registry)
        return ResultInterpreter(self._instance, self.config).interpret(self._result)

    def optimize(self, instance: ProblemInstance) -> DispatchOutcome:
        """Build and solve the optimization model in one step.

        Args:
            instance: Problem instance to solve.

        Returns:
            DispatchOutcome with the schedule or a diagnostic status.
        """
        self.build_model(instance)
        return self.solve()


def solve_instance(
    instance: ProblemInstance, config: OptimizationConfig | None = None
) -> DispatchOutcome:
    """Formulate and solve one instance without keeping any state around."""
    return UnitCommitmentOptimizer(config).optimize(instance)
