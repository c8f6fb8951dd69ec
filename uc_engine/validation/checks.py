"""Physical consistency checks for dispatch schedules.

Re-verifies a Schedule against the rules the MILP encodes, so that a
solution can be audited independently of the solver that produced it.
The result interpreter never uses these checks to reject a solution.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from uc_engine.domain.models import ProblemInstance, Schedule


class Rule(str, Enum):
    """Physical rules a schedule is checked against."""

    POWER_BALANCE = "power_balance"
    RENEWABLE_SPLIT = "renewable_split"
    COMMITMENT_LINKAGE = "commitment_linkage"
    UNIT_CAPACITY = "unit_capacity"
    SOC_INITIAL = "soc_initial"
    SOC_DYNAMICS = "soc_dynamics"
    SOC_BOUNDS = "soc_bounds"
    SOC_FINAL = "soc_final"
    BATTERY_POWER = "battery_power"
    OVER_DISCHARGE = "over_discharge"
    TRANSITION_FLAGS = "transition_flags"
    MIN_UP_TIME = "min_up_time"
    MIN_DOWN_TIME = "min_down_time"
    RAMP_LIMIT = "ramp_limit"
    SPINNING_RESERVE = "spinning_reserve"
    EMISSION_CAP = "emission_cap"


@dataclass(frozen=True)
class Violation:
    """A single broken rule.

    Attributes:
        rule: Which rule is broken.
        hour: Hour at which it is broken (None for horizon-wide rules).
        unit_index: Unit involved, if any.
        message: Human-readable detail.
    """

    rule: Rule
    hour: int | None
    unit_index: int | None
    message: str


class ScheduleChecker:
    """Checks a schedule against a problem instance.

    Example:
        ```python
        checker = ScheduleChecker(instance)
        violations = checker.check(outcome.require_schedule())
        assert not violations
        ```
    """

    def __init__(self, instance: ProblemInstance, tolerance: float = 1e-3) -> None:
        """Initialize the checker.

        Args:
            instance: Problem instance the schedule was solved for.
            tolerance: Absolute tolerance for every comparison.
        """
        self.instance = instance
        self.tolerance = tolerance

    def check(self, schedule: Schedule) -> list[Violation]:
        """Run every check and collect the violations.

        Raises:
            ValueError: If the schedule does not match the instance's shape.
        """
        if schedule.num_hours != self.instance.num_hours:
            raise ValueError(
                f"Schedule has {schedule.num_hours} hours, instance has "
                f"{self.instance.num_hours}"
            )

        violations: list[Violation] = []
        violations.extend(self.check_balance(schedule))
        violations.extend(self.check_units(schedule))
        violations.extend(self.check_battery(schedule))
        violations.extend(self.check_transitions(schedule))
        violations.extend(self.check_minimum_times(schedule))
        violations.extend(self.check_ramps(schedule))
        violations.extend(self.check_reserve(schedule))
        violations.extend(self.check_emissions(schedule))
        return violations

    def is_feasible(self, schedule: Schedule) -> bool:
        return not self.check(schedule)

    def check_balance(self, schedule: Schedule) -> list[Violation]:
        violations = []
        for h in schedule.hours:
            if not h.validate_power_balance(self.tolerance):
                violations.append(
                    Violation(
                        Rule.POWER_BALANCE,
                        h.hour,
                        None,
                        f"supply {h.net_supply_mw:.4f} MW != demand {h.demand_mw:.4f} MW",
                    )
                )
            available = self.instance.availability_at(h.hour)
            split = h.renewable_used_mw + h.curtailed_mw
            if abs(split - available) > self.tolerance:
                violations.append(
                    Violation(
                        Rule.RENEWABLE_SPLIT,
                        h.hour,
                        None,
                        f"used + curtailed {split:.4f} MW != available {available:.4f} MW",
                    )
                )
        return violations

    def check_units(self, schedule: Schedule) -> list[Violation]:
        violations = []
        for h in schedule.hours:
            for u in h.units:
                capacity = self.instance.units[u.unit_index].capacity_mw
                if not u.committed and u.generation_mw > self.tolerance:
                    violations.append(
                        Violation(
                            Rule.COMMITMENT_LINKAGE,
                            h.hour,
                            u.unit_index,
                            f"generates {u.generation_mw:.4f} MW while off",
                        )
                    )
                if u.generation_mw > capacity + self.tolerance:
                    violations.append(
                        Violation(
                            Rule.UNIT_CAPACITY,
                            h.hour,
                            u.unit_index,
                            f"generates {u.generation_mw:.4f} MW above {capacity} MW",
                        )
                    )
        return violations

    def check_battery(self, schedule: Schedule) -> list[Violation]:
        battery = self.instance.battery
        eta = battery.efficiency
        tol = self.tolerance
        violations = []

        first = schedule.hours[0]
        if abs(first.soc_mwh - battery.initial_soc_mwh) > tol:
            violations.append(
                Violation(
                    Rule.SOC_INITIAL,
                    first.hour,
                    None,
                    f"starts at {first.soc_mwh:.4f} MWh, expected "
                    f"{battery.initial_soc_mwh:.4f} MWh",
                )
            )

        previous = None
        for h in schedule.hours:
            if not -tol <= h.soc_mwh <= battery.capacity_mwh + tol:
                violations.append(
                    Violation(Rule.SOC_BOUNDS, h.hour, None, f"SOC {h.soc_mwh:.4f} MWh")
                )
            if max(h.charge_mw, h.discharge_mw) > battery.max_power_mw + tol:
                violations.append(
                    Violation(
                        Rule.BATTERY_POWER,
                        h.hour,
                        None,
                        f"charge {h.charge_mw:.4f} / discharge {h.discharge_mw:.4f} MW "
                        f"above {battery.max_power_mw} MW",
                    )
                )

            stored_before = (
                previous.soc_mwh if previous is not None else battery.initial_soc_mwh
            )
            if h.discharge_mw > stored_before + tol:
                violations.append(
                    Violation(
                        Rule.OVER_DISCHARGE,
                        h.hour,
                        None,
                        f"discharges {h.discharge_mw:.4f} MW with "
                        f"{stored_before:.4f} MWh stored",
                    )
                )

            if previous is not None:
                expected = (
                    previous.soc_mwh
                    + eta * previous.charge_mw
                    - previous.discharge_mw / eta
                )
                if abs(h.soc_mwh - expected) > tol:
                    violations.append(
                        Violation(
                            Rule.SOC_DYNAMICS,
                            h.hour,
                            None,
                            f"SOC {h.soc_mwh:.4f} MWh, recursion gives {expected:.4f}",
                        )
                    )
            previous = h

        last = schedule.hours[-1]
        remaining = last.soc_mwh + eta * last.charge_mw - last.discharge_mw / eta
        if remaining < -tol:
            violations.append(
                Violation(
                    Rule.SOC_FINAL,
                    last.hour,
                    None,
                    f"ends the horizon {-remaining:.4f} MWh below empty",
                )
            )
        return violations

    def check_transitions(self, schedule: Schedule) -> list[Violation]:
        violations = []
        for f, unit in enumerate(self.instance.units):
            was_on = unit.initially_on
            for h in schedule.hours:
                u = h.units[f]
                started = u.committed and not was_on
                stopped = was_on and not u.committed
                if u.start_up != started or u.shut_down != stopped:
                    violations.append(
                        Violation(
                            Rule.TRANSITION_FLAGS,
                            h.hour,
                            f,
                            f"start_up={u.start_up} shut_down={u.shut_down} but "
                            f"commitment goes {was_on} -> {u.committed}",
                        )
                    )
                was_on = u.committed
        return violations

    def check_minimum_times(self, schedule: Schedule) -> list[Violation]:
        horizon = self.instance.horizon
        violations = []
        for f, unit in enumerate(self.instance.units):
            on = schedule.commitment(f)
            for t in horizon.hours:
                was_on = on[t - 2] if t > 1 else unit.initially_on
                is_on = on[t - 1]
                if is_on and not was_on:
                    window = horizon.window(t, unit.min_up_hours)
                    if not all(on[tau - 1] for tau in window):
                        violations.append(
                            Violation(
                                Rule.MIN_UP_TIME,
                                t,
                                f,
                                f"started at hour {t} but off within hours "
                                f"{window.start}-{window.stop - 1}",
                            )
                        )
                elif was_on and not is_on:
                    window = horizon.window(t, unit.min_down_hours)
                    if any(on[tau - 1] for tau in window):
                        violations.append(
                            Violation(
                                Rule.MIN_DOWN_TIME,
                                t,
                                f,
                                f"stopped at hour {t} but on within hours "
                                f"{window.start}-{window.stop - 1}",
                            )
                        )
        return violations

    def check_ramps(self, schedule: Schedule) -> list[Violation]:
        violations = []
        for f, unit in enumerate(self.instance.units):
            if unit.ramp_limit_mw is None:
                continue
            output = schedule.generation(f)
            for t in range(2, schedule.num_hours + 1):
                step = output[t - 1] - output[t - 2]
                if abs(step) > unit.ramp_limit_mw + self.tolerance:
                    violations.append(
                        Violation(
                            Rule.RAMP_LIMIT,
                            t,
                            f,
                            f"ramps {step:+.4f} MW, limit {unit.ramp_limit_mw} MW",
                        )
                    )
        return violations

    def check_reserve(self, schedule: Schedule) -> list[Violation]:
        fraction = self.instance.policy.reserve_fraction
        max_power = self.instance.battery.max_power_mw
        violations = []
        for h in schedule.hours:
            headroom = sum(
                self.instance.units[u.unit_index].capacity_mw - u.generation_mw
                for u in h.units
                if u.committed
            ) + (max_power - h.discharge_mw)
            required = fraction * h.demand_mw
            if headroom < required - self.tolerance:
                violations.append(
                    Violation(
                        Rule.SPINNING_RESERVE,
                        h.hour,
                        None,
                        f"headroom {headroom:.4f} MW below required {required:.4f} MW",
                    )
                )
        return violations

    def check_emissions(self, schedule: Schedule) -> list[Violation]:
        cap = self.instance.policy.emission_cap
        if cap is None:
            return []
        total = total_emissions(self.instance, schedule)
        if total > cap + self.tolerance:
            return [
                Violation(
                    Rule.EMISSION_CAP, None, None, f"emits {total:.4f} t, cap {cap} t"
                )
            ]
        return []


def total_emissions(instance: ProblemInstance, schedule: Schedule) -> float:
    """Total emissions (t) of a schedule over the horizon."""
    return sum(
        instance.units[u.unit_index].emission_factor * u.generation_mw
        for h in schedule.hours
        for u in h.units
    )
