"""Turns raw solver output into an hourly operating schedule."""

import logging
from typing import Any

from uc_engine.domain.models import (
    DispatchOutcome,
    HourlyDispatch,
    ProblemInstance,
    Schedule,
    SolveStatus,
    UnitDispatch,
)
from uc_engine.optimization.config import OptimizationConfig
from uc_engine.optimization.objective import cost_breakdown
from uc_engine.optimization.solver import SolveResult

logger = logging.getLogger(__name__)


class ResultInterpreter:
    """Maps variable values back onto the domain.

    Solver-optimal values are trusted as reported: they are rounded and
    clamped at zero to strip numerical noise, never re-checked against the
    constraints.
    """

    def __init__(
        self,
        instance: ProblemInstance,
        config: OptimizationConfig | None = None,
    ) -> None:
        self.instance = instance
        self.config = config or OptimizationConfig()

    def interpret(self, result: SolveResult) -> DispatchOutcome:
        """Build the outcome of a solver run.

        Args:
            result: Raw result from the solver adapter.

        Returns:
            DispatchOutcome carrying a Schedule when the solve was optimal,
            and only the status otherwise.
        """
        schedule = None
        if result.status == SolveStatus.OPTIMAL and result.has_solution:
            schedule = self.build_schedule(result.values, result.objective_value)
        else:
            logger.warning(
                "No schedule for '%s': solver reported %s (%s)",
                self.instance.name,
                result.status.value,
                result.termination_condition,
            )

        return DispatchOutcome(
            instance_name=self.instance.name,
            status=result.status,
            termination_condition=result.termination_condition,
            solver_name=result.solver_name,
            objective_value=result.objective_value,
            solve_time_seconds=result.solve_time_seconds,
            schedule=schedule,
        )

    def build_schedule(
        self,
        values: dict[str, dict[Any, float]],
        total_cost: float | None = None,
    ) -> Schedule:
        """Assemble a Schedule from variable values.

        Args:
            values: Variable values keyed as by ``VariableRegistry.extract_values``.
            total_cost: Objective value; recomputed from the values if None.

        Returns:
            Schedule with one HourlyDispatch per horizon hour.
        """
        instance = self.instance
        costs = cost_breakdown(instance, values)

        # Transition variables are only bounded below, so read them off the
        # commitment series instead of the solver values.
        transitions = [
            self.transitions(
                [self._flag(values["committed"][f, t]) for t in instance.hours],
                unit.initially_on,
            )
            for f, unit in enumerate(instance.units)
        ]

        hours = []
        for i, t in enumerate(instance.hours):
            units = tuple(
                UnitDispatch(
                    unit_index=f,
                    name=unit.name,
                    committed=transitions[f][i][0],
                    generation_mw=self._amount(values["generation"][f, t]),
                    start_up=transitions[f][i][1],
                    shut_down=transitions[f][i][2],
                )
                for f, unit in enumerate(instance.units)
            )
            hours.append(
                HourlyDispatch(
                    hour=t,
                    demand_mw=instance.demand_at(t),
                    units=units,
                    renewable_used_mw=self._amount(values["renewable_used"][t]),
                    curtailed_mw=self._amount(values["curtailed"][t]),
                    charge_mw=self._amount(values["charge"][t]),
                    discharge_mw=self._amount(values["discharge"][t]),
                    soc_mwh=self._amount(values["soc"][t]),
                )
            )

        return Schedule(
            status=SolveStatus.OPTIMAL,
            total_cost=total_cost if total_cost is not None else costs.total,
            costs=costs,
            hours=tuple(hours),
        )

    @staticmethod
    def transitions(
        on: list[bool], initially_on: bool = False
    ) -> list[tuple[bool, bool, bool]]:
        """(committed, started, stopped) for each hour of an on/off series.

        Args:
            on: Commitment state per hour.
            initially_on: State before the first hour.
        """
        flags = []
        was_on = initially_on
        for is_on in on:
            flags.append((is_on, is_on and not was_on, was_on and not is_on))
            was_on = is_on
        return flags

    def _amount(self, value: float) -> float:
        return max(0.0, round(value, self.config.round_decimals))

    @staticmethod
    def _flag(value: float) -> bool:
        return value > 0.5
