"""Tests for text reports."""

import pytest

from uc_engine.domain.models import (
    CostBreakdown,
    DispatchOutcome,
    HourlyDispatch,
    Schedule,
    SolveStatus,
    UnitDispatch,
)
from uc_engine.reporting import TextReportConfig, format_outcome, format_schedule


@pytest.fixture
def schedule() -> Schedule:
    hours = tuple(
        HourlyDispatch(
            hour=t,
            demand_mw=80.0,
            units=(
                UnitDispatch(
                    unit_index=0,
                    name="base",
                    committed=True,
                    generation_mw=70.0,
                    start_up=t == 1,
                ),
            ),
            renewable_used_mw=10.0,
            curtailed_mw=2.5,
            charge_mw=0.0,
            discharge_mw=0.0,
            soc_mwh=0.0,
        )
        for t in (1, 2)
    )
    return Schedule(
        status=SolveStatus.OPTIMAL,
        total_cost=7100.0,
        costs=CostBreakdown(generation=7000.0, startup=100.0),
        hours=hours,
    )


class TestFormatSchedule:
    """Tests for format_schedule."""

    def test_hour_lines(self, schedule: Schedule) -> None:
        """Test one line per hour with every quantity."""
        report = format_schedule(schedule)

        assert report.startswith("=== Optimal Solution ===")
        assert "Hour 1: Fossil: 70.00 MW, Renewable: 10.00 MW (curtailed 2.50)" in report
        assert "Battery: Charge=0.00 MW Discharge=0.00 MW Stored=0.00 MWh" in report
        assert "Hour 2:" in report
        assert "Total Cost: $7,100.00" in report

    def test_cost_breakdown_section(self, schedule: Schedule) -> None:
        """Test the breakdown and curtailment summary."""
        report = format_schedule(schedule)
        assert "Start-up: $100.00" in report
        assert "Curtailment: 5.00 MWh" in report
        assert "start-ups: 1" in report

    def test_compact_report(self, schedule: Schedule) -> None:
        """Test that unit and cost sections can be switched off."""
        config = TextReportConfig(decimals=1, show_units=False, show_costs=False)
        report = format_schedule(schedule, config)

        assert "Units:" not in report
        assert "Start-up:" not in report
        assert "Fossil: 70.0 MW" in report


class TestFormatOutcome:
    """Tests for format_outcome."""

    def test_optimal_outcome(self, schedule: Schedule) -> None:
        """Test that an optimal outcome includes the schedule."""
        outcome = DispatchOutcome(
            instance_name="demo",
            status=SolveStatus.OPTIMAL,
            termination_condition="optimal",
            solver_name="appsi_highs",
            objective_value=7100.0,
            schedule=schedule,
        )
        report = format_outcome(outcome)

        assert "Instance: demo" in report
        assert "Status: optimal" in report
        assert "=== Optimal Solution ===" in report

    @pytest.mark.parametrize(
        "status, termination",
        [
            (SolveStatus.INFEASIBLE, "infeasible"),
            (SolveStatus.TIME_LIMIT, "maxTimeLimit"),
        ],
    )
    def test_outcome_without_schedule(self, status: SolveStatus, termination: str) -> None:
        """Test that a missing schedule is stated, not silently omitted."""
        outcome = DispatchOutcome(status=status, termination_condition=termination)
        report = format_outcome(outcome)

        assert f"Status: {status.value}" in report
        assert "=== No Schedule ===" in report
        assert termination in report
        assert "Hour 1" not in report
