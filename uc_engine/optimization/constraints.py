"""Constraint families of the day-ahead unit commitment MILP.

Parameters:
- D[t]: demand (MW)
- A[t]: renewable availability (MW)
- K[f]: unit capacity (MW), R[f]: ramp limit (MW/h)
- UT[f], DT[f]: minimum up / down time (h)
- e[f]: emission factor (t/MWh), E: emission cap (t)
- η: battery efficiency, P: battery power limit (MW), S0: initial SOC (MWh)
- r: spinning reserve fraction

Constraints:
1. Power balance: Σ_f g[f,t] + u[t] + d[t] - c[t] = D[t]
2. Renewable split: u[t] + z[t] = A[t]
3. Commitment linkage: g[f,t] <= K[f] * on[f,t]
4. SOC recursion: soc[1] = S0; soc[t] = soc[t-1] + η c[t-1] - d[t-1] / η
5. No over-discharge: d[t] <= soc[t-1] (d[1] <= S0)
   and soc[T] + η c[T] - d[T] / η >= 0
6. Transitions: su[f,t] >= on[f,t] - on[f,t-1]; sd[f,t] >= on[f,t-1] - on[f,t]
7. Min up/down: on[f,t] - on[f,t-1] <= on[f,τ]
                on[f,t-1] - on[f,t] <= 1 - on[f,τ]   for τ in (t, min(t+UT-1, T)]
8. Ramping: |g[f,t] - g[f,t-1]| <= R[f] for t > 1
9. Spinning reserve: Σ_f (K[f] on[f,t] - g[f,t]) + (P - d[t]) >= r D[t]
10. Emission cap: Σ_f Σ_t e[f] g[f,t] <= E

on[f,0] is the unit's ``initially_on`` flag, a constant rather than a variable.
"""

import logging
from typing import Any

import pyomo.environ as pyo

from uc_engine.domain.models import ProblemInstance

logger = logging.getLogger(__name__)


class ConstraintGenerator:
    """Generates every constraint family over registered variables.

    Each ``add_*`` method adds one family and can be called on its own;
    ``generate`` adds them all. Constraint order carries no meaning.
    """

    def __init__(self, instance: ProblemInstance) -> None:
        """Initialize the generator.

        Args:
            instance: Problem instance supplying the parameters.
        """
        self.instance = instance
        self.horizon = instance.horizon

    def generate(self, model: pyo.ConcreteModel) -> pyo.ConcreteModel:
        """Add all constraint families to ``model``.

        Args:
            model: Model populated by ``VariableRegistry.declare``.

        Returns:
            The same model, for chaining.
        """
        self.add_power_balance(model)
        self.add_renewable_split(model)
        self.add_commitment_linkage(model)
        self.add_storage_dynamics(model)
        self.add_transition_tracking(model)
        self.add_minimum_up_down(model)
        self.add_ramp_limits(model)
        self.add_spinning_reserve(model)
        self.add_emission_cap(model)

        n_constraints = sum(
            len(c) for c in model.component_objects(pyo.Constraint, active=True)
        )
        logger.debug("Generated %d constraints for '%s'", n_constraints, self.instance.name)
        return model

    def previous_commitment(self, m: Any, f: int, t: int) -> Any:
        """Commitment of unit ``f`` in the hour before ``t``.

        Before the first hour this is the unit's fixed initial state.
        """
        if t == self.horizon.first:
            return 1 if self.instance.units[f].initially_on else 0
        return m.committed[f, t - 1]

    # =================================================================
    # 1-2. Energy balance
    # =================================================================

    def add_power_balance(self, model: pyo.ConcreteModel) -> None:
        instance = self.instance

        def power_balance_rule(m: Any, t: int) -> Any:
            return (
                sum(m.generation[f, t] for f in m.F)
                + m.renewable_used[t]
                + m.discharge[t]
                - m.charge[t]
                == instance.demand_at(t)
            )

        model.power_balance = pyo.Constraint(
            model.T, rule=power_balance_rule, doc="Supply equals demand"
        )

    def add_renewable_split(self, model: pyo.ConcreteModel) -> None:
        instance = self.instance

        def renewable_split_rule(m: Any, t: int) -> Any:
            return m.renewable_used[t] + m.curtailed[t] == instance.availability_at(t)

        model.renewable_split = pyo.Constraint(
            model.T, rule=renewable_split_rule, doc="Used + curtailed = available"
        )

    # =================================================================
    # 3. Commitment linkage
    # =================================================================

    def add_commitment_linkage(self, model: pyo.ConcreteModel) -> None:
        units = self.instance.units

        def linkage_rule(m: Any, f: int, t: int) -> Any:
            return m.generation[f, t] <= units[f].capacity_mw * m.committed[f, t]

        model.commitment_linkage = pyo.Constraint(
            model.F, model.T, rule=linkage_rule, doc="No output while off"
        )

    # =================================================================
    # 4-5. Battery
    # =================================================================

    def add_storage_dynamics(self, model: pyo.ConcreteModel) -> None:
        battery = self.instance.battery
        first = self.horizon.first

        def soc_dynamics_rule(m: Any, t: int) -> Any:
            if t == first:
                return m.soc[t] == battery.initial_soc_mwh
            return m.soc[t] == (
                m.soc[t - 1]
                + battery.efficiency * m.charge[t - 1]
                - m.discharge[t - 1] / battery.efficiency
            )

        model.soc_dynamics = pyo.Constraint(
            model.T, rule=soc_dynamics_rule, doc="SOC dynamics"
        )

        # Energy discharged in hour t must already be stored at hour t-1
        def discharge_limit_rule(m: Any, t: int) -> Any:
            if t == first:
                return m.discharge[t] <= battery.initial_soc_mwh
            return m.discharge[t] <= m.soc[t - 1]

        model.discharge_limit = pyo.Constraint(
            model.T, rule=discharge_limit_rule, doc="No over-discharge"
        )

        # Hour-T flows would otherwise leave the horizon without touching the SOC
        last = self.horizon.last
        model.final_soc = pyo.Constraint(
            expr=model.soc[last]
            + battery.efficiency * model.charge[last]
            - model.discharge[last] / battery.efficiency
            >= 0,
            doc="Energy left after the last hour",
        )

    # =================================================================
    # 6-7. Commitment logic
    # =================================================================

    def add_transition_tracking(self, model: pyo.ConcreteModel) -> None:
        # Inequalities only: start-up cost pushes start_up down to the indicator.
        def startup_rule(m: Any, f: int, t: int) -> Any:
            previous = self.previous_commitment(m, f, t)
            return m.start_up[f, t] >= m.committed[f, t] - previous

        def shutdown_rule(m: Any, f: int, t: int) -> Any:
            previous = self.previous_commitment(m, f, t)
            return m.shut_down[f, t] >= previous - m.committed[f, t]

        model.startup_tracking = pyo.Constraint(
            model.F, model.T, rule=startup_rule, doc="Start-up detection"
        )
        model.shutdown_tracking = pyo.Constraint(
            model.F, model.T, rule=shutdown_rule, doc="Shut-down detection"
        )

    def minimum_time_windows(self, attribute: str) -> list[tuple[int, int, int]]:
        """Enumerate (unit, hour, later hour) triples for min up/down time.

        The hour itself is left out of each window since on[t] - on[t-1] <= on[t]
        always holds.

        Args:
            attribute: ``"min_up_hours"`` or ``"min_down_hours"``.
        """
        triples = []
        for f, unit in enumerate(self.instance.units):
            duration = getattr(unit, attribute)
            for t in self.horizon.hours:
                for tau in self.horizon.window(t, duration)[1:]:
                    triples.append((f, t, tau))
        return triples

    def add_minimum_up_down(self, model: pyo.ConcreteModel) -> None:
        model.MIN_UP = pyo.Set(
            dimen=3,
            initialize=self.minimum_time_windows("min_up_hours"),
            doc="(unit, start hour, hour that must stay on)",
        )
        model.MIN_DOWN = pyo.Set(
            dimen=3,
            initialize=self.minimum_time_windows("min_down_hours"),
            doc="(unit, stop hour, hour that must stay off)",
        )

        def min_up_rule(m: Any, f: int, t: int, tau: int) -> Any:
            previous = self.previous_commitment(m, f, t)
            return m.committed[f, t] - previous <= m.committed[f, tau]

        def min_down_rule(m: Any, f: int, t: int, tau: int) -> Any:
            previous = self.previous_commitment(m, f, t)
            return previous - m.committed[f, t] <= 1 - m.committed[f, tau]

        model.min_up_time = pyo.Constraint(
            model.MIN_UP, rule=min_up_rule, doc="Minimum up time"
        )
        model.min_down_time = pyo.Constraint(
            model.MIN_DOWN, rule=min_down_rule, doc="Minimum down time"
        )

    # =================================================================
    # 8. Ramping
    # =================================================================

    def add_ramp_limits(self, model: pyo.ConcreteModel) -> None:
        units = self.instance.units
        first = self.horizon.first

        def ramp_up_rule(m: Any, f: int, t: int) -> Any:
            limit = units[f].ramp_limit_mw
            if t == first or limit is None:
                return pyo.Constraint.Skip
            return m.generation[f, t] - m.generation[f, t - 1] <= limit

        def ramp_down_rule(m: Any, f: int, t: int) -> Any:
            limit = units[f].ramp_limit_mw
            if t == first or limit is None:
                return pyo.Constraint.Skip
            return m.generation[f, t - 1] - m.generation[f, t] <= limit

        model.ramp_up = pyo.Constraint(
            model.F, model.T, rule=ramp_up_rule, doc="Ramp-up limit"
        )
        model.ramp_down = pyo.Constraint(
            model.F, model.T, rule=ramp_down_rule, doc="Ramp-down limit"
        )

    # =================================================================
    # 9-10. Reliability policy
    # =================================================================

    def add_spinning_reserve(self, model: pyo.ConcreteModel) -> None:
        instance = self.instance
        units = instance.units
        fraction = instance.policy.reserve_fraction
        max_power = instance.battery.max_power_mw

        def reserve_rule(m: Any, t: int) -> Any:
            if fraction == 0:
                return pyo.Constraint.Skip
            fossil_headroom = sum(
                units[f].capacity_mw * m.committed[f, t] - m.generation[f, t]
                for f in m.F
            )
            battery_headroom = max_power - m.discharge[t]
            return fossil_headroom + battery_headroom >= fraction * instance.demand_at(t)

        model.spinning_reserve = pyo.Constraint(
            model.T, rule=reserve_rule, doc="Spinning reserve requirement"
        )

    def add_emission_cap(self, model: pyo.ConcreteModel) -> None:
        units = self.instance.units
        cap = self.instance.policy.emission_cap
        # With no emitting unit the cap holds trivially
        has_emitters = any(unit.emission_factor > 0 for unit in units)

        def emission_rule(m: Any) -> Any:
            if cap is None or not has_emitters:
                return pyo.Constraint.Skip
            return (
                sum(
                    units[f].emission_factor * m.generation[f, t]
                    for f in m.F
                    for t in m.T
                )
                <= cap
            )

        model.emission_cap = pyo.Constraint(
            rule=emission_rule, doc="Horizon-wide emission cap"
        )
