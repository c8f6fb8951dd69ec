"""Decision variable registry for the unit commitment MILP.

Decision Variables (f = fossil unit, t = hour):
- generation[f,t]: unit output (MW), 0 <= g <= capacity[f]
- committed[f,t]: unit on/off (binary)
- start_up[f,t], shut_down[f,t]: transition indicators (binary)
- renewable_used[t]: renewable energy dispatched (MW), 0 <= r <= availability[t]
- curtailed[t]: renewable energy spilled (MW), 0 <= z <= availability[t]
- charge[t], discharge[t]: battery power (MW), 0 <= x <= max_power
- soc[t]: battery state of charge (MWh), 0 <= soc <= capacity
"""

import logging
from typing import Any

import pyomo.environ as pyo

from uc_engine.domain.models import ProblemInstance

logger = logging.getLogger(__name__)

# Variables indexed by (unit, hour)
UNIT_VARIABLES = ("generation", "committed", "start_up", "shut_down")
# Variables indexed by hour
HOUR_VARIABLES = ("renewable_used", "curtailed", "charge", "discharge", "soc")
VARIABLE_NAMES = UNIT_VARIABLES + HOUR_VARIABLES


class VariableRegistry:
    """Declares every decision variable of a problem instance on a Pyomo model.

    The registry is the only place that knows how domain quantities map onto
    Pyomo components; the interpreter reads solutions back through
    ``extract_values`` instead of touching the model directly.
    """

    def __init__(self, instance: ProblemInstance) -> None:
        """Initialize the registry.

        Args:
            instance: Problem instance the variables describe.

        Raises:
            ValueError: If the instance has an empty horizon.
        """
        if instance.num_hours < 1:
            raise ValueError("Problem instance has an empty time horizon.")
        self.instance = instance

    def declare(self, model: pyo.ConcreteModel) -> None:
        """Add index sets and decision variables to ``model``.

        Bounds are set per index so each variable is as tight as the data
        allows without looking ahead in time.

        Args:
            model: Empty Pyomo model to populate.
        """
        instance = self.instance
        units = instance.units
        battery = instance.battery

        # =================================================================
        # Sets
        # =================================================================
        model.T = pyo.Set(initialize=list(instance.hours), ordered=True, doc="Hours")
        model.F = pyo.Set(
            initialize=list(instance.unit_indices), ordered=True, doc="Fossil units"
        )

        # =================================================================
        # Fossil units
        # =================================================================
        def generation_bounds(_m: Any, f: int, _t: int) -> tuple[float, float]:
            return (0.0, units[f].capacity_mw)

        model.generation = pyo.Var(
            model.F,
            model.T,
            domain=pyo.NonNegativeReals,
            bounds=generation_bounds,
            doc="Unit output (MW)",
        )
        model.committed = pyo.Var(
            model.F, model.T, domain=pyo.Binary, doc="Unit committed (on/off)"
        )
        model.start_up = pyo.Var(
            model.F, model.T, domain=pyo.Binary, doc="Unit started this hour"
        )
        model.shut_down = pyo.Var(
            model.F, model.T, domain=pyo.Binary, doc="Unit shut down this hour"
        )

        # =================================================================
        # Renewables
        # =================================================================
        def availability_bounds(_m: Any, t: int) -> tuple[float, float]:
            return (0.0, instance.availability_at(t))

        model.renewable_used = pyo.Var(
            model.T,
            domain=pyo.NonNegativeReals,
            bounds=availability_bounds,
            doc="Renewable energy used (MW)",
        )
        model.curtailed = pyo.Var(
            model.T,
            domain=pyo.NonNegativeReals,
            bounds=availability_bounds,
            doc="Renewable energy curtailed (MW)",
        )

        # =================================================================
        # Battery
        # =================================================================
        power_bounds = (0.0, battery.max_power_mw)
        model.charge = pyo.Var(
            model.T,
            domain=pyo.NonNegativeReals,
            bounds=power_bounds,
            doc="Battery charging power (MW)",
        )
        model.discharge = pyo.Var(
            model.T,
            domain=pyo.NonNegativeReals,
            bounds=power_bounds,
            doc="Battery discharging power (MW)",
        )
        model.soc = pyo.Var(
            model.T,
            domain=pyo.NonNegativeReals,
            bounds=(0.0, battery.capacity_mwh),
            doc="Battery state of charge (MWh)",
        )

        logger.debug(
            "Declared variables for %d units x %d hours (%d binaries)",
            len(units),
            instance.num_hours,
            3 * len(units) * instance.num_hours,
        )

    def extract_values(self, model: pyo.ConcreteModel) -> dict[str, dict[Any, float]]:
        """Read the current variable values off a solved model.

        Args:
            model: Model populated by ``declare`` with a solution loaded.

        Returns:
            Mapping of variable name to ``{index: value}``. Unit variables are
            keyed by ``(unit, hour)``, hourly variables by ``hour``. Values
            the solver left unset are reported as 0.0.
        """
        values: dict[str, dict[Any, float]] = {}
        for name in VARIABLE_NAMES:
            component = getattr(model, name)
            values[name] = {
                index: (value if value is not None else 0.0)
                for index, value in component.extract_values().items()
            }
        return values
