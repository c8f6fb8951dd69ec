"""Total-cost objective for the unit commitment MILP.

Minimize:
    Σ_f Σ_t c_gen[f] * generation[f,t]
  + Σ_f Σ_t c_start[f] * start_up[f,t]
  + c_bat * Σ_t (charge[t] + discharge[t])
  + c_ren * Σ_t renewable_used[t]
"""

from typing import Any

import pyomo.environ as pyo

from uc_engine.domain.models import CostBreakdown, ProblemInstance


def build_objective(model: pyo.ConcreteModel, instance: ProblemInstance) -> pyo.Objective:
    """Attach the cost-minimizing objective to a model with declared variables.

    Args:
        model: Model populated by ``VariableRegistry.declare``.
        instance: Problem instance supplying the cost coefficients.

    Returns:
        The ``total_cost`` objective component.
    """
    units = instance.units
    storage_cost = instance.battery.operating_cost_per_mwh
    renewable_cost = instance.renewable_cost

    def total_cost_rule(m: Any) -> Any:
        generation = sum(
            units[f].generation_cost * m.generation[f, t] for f in m.F for t in m.T
        )
        startup = sum(units[f].startup_cost * m.start_up[f, t] for f in m.F for t in m.T)
        storage = storage_cost * sum(m.charge[t] + m.discharge[t] for t in m.T)
        renewable = renewable_cost * sum(m.renewable_used[t] for t in m.T)
        return generation + startup + storage + renewable

    model.total_cost = pyo.Objective(
        rule=total_cost_rule, sense=pyo.minimize, doc="Total operating cost ($)"
    )
    return model.total_cost


def cost_breakdown(
    instance: ProblemInstance, values: dict[str, dict[Any, float]]
) -> CostBreakdown:
    """Evaluate each objective term on a solution.

    Args:
        instance: Problem instance supplying the cost coefficients.
        values: Variable values as returned by ``VariableRegistry.extract_values``.

    Returns:
        CostBreakdown whose total equals the objective value.
    """
    units = instance.units
    return CostBreakdown(
        generation=sum(
            units[f].generation_cost * value
            for (f, _t), value in values["generation"].items()
        ),
        startup=sum(
            units[f].startup_cost * value
            for (f, _t), value in values["start_up"].items()
        ),
        storage=instance.battery.operating_cost_per_mwh
        * (sum(values["charge"].values()) + sum(values["discharge"].values())),
        renewable=instance.renewable_cost * sum(values["renewable_used"].values()),
    )
