"""Plain-text report for dispatch outcomes.

Presentation only: consumes a DispatchOutcome produced by the optimizer and
never triggers a solve itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from uc_engine.domain.models import DispatchOutcome, HourlyDispatch, Schedule


@dataclass
class TextReportConfig:
    """Configuration for text reports.

    Attributes:
        decimals: Digits shown for MW / MWh quantities.
        show_units: Whether to list each unit's on/off state and output.
        show_costs: Whether to append the cost breakdown.
    """

    decimals: int = 2
    show_units: bool = True
    show_costs: bool = True


def _format_hour(hour: HourlyDispatch, config: TextReportConfig) -> str:
    d = config.decimals
    line = (
        f"Hour {hour.hour}: Fossil: {hour.fossil_generation_mw:.{d}f} MW, "
        f"Renewable: {hour.renewable_used_mw:.{d}f} MW "
        f"(curtailed {hour.curtailed_mw:.{d}f}), "
        f"Battery: Charge={hour.charge_mw:.{d}f} MW "
        f"Discharge={hour.discharge_mw:.{d}f} MW "
        f"Stored={hour.soc_mwh:.{d}f} MWh"
    )
    if config.show_units and hour.units:
        states = ", ".join(
            f"{u.name}={'ON' if u.committed else 'off'} {u.generation_mw:.{d}f}"
            for u in hour.units
        )
        line += f"\n    Units: {states}"
    return line


def format_schedule(schedule: Schedule, config: TextReportConfig | None = None) -> str:
    """Render an hour-by-hour schedule."""
    config = config or TextReportConfig()
    lines = ["=== Optimal Solution ==="]
    lines.extend(_format_hour(hour, config) for hour in schedule.hours)
    lines.append(f"Total Cost: ${schedule.total_cost:,.2f}")

    if config.show_costs:
        costs = schedule.costs
        lines.append(
            f"  Generation: ${costs.generation:,.2f}  Start-up: ${costs.startup:,.2f}  "
            f"Storage: ${costs.storage:,.2f}  Renewable: ${costs.renewable:,.2f}"
        )
        lines.append(
            f"  Curtailment: {schedule.total_curtailed_mwh:.{config.decimals}f} MWh "
            f"({schedule.curtailment_rate:.1f}%), start-ups: {schedule.startup_count}"
        )
    return "\n".join(lines)


def format_outcome(outcome: DispatchOutcome, config: TextReportConfig | None = None) -> str:
    """Render a solve outcome, stating the status explicitly when not optimal."""
    header = (
        f"Instance: {outcome.instance_name or '-'}  Solver: {outcome.solver_name or '-'}  "
        f"Status: {outcome.status.value}  ({outcome.solve_time_seconds:.2f}s)"
    )
    if outcome.schedule is None:
        return "\n".join(
            [
                header,
                "=== No Schedule ===",
                f"Solver terminated with '{outcome.termination_condition}'; "
                "no dispatch is available for this instance.",
            ]
        )
    return "\n".join([header, format_schedule(outcome.schedule, config)])
