"""Tests for the reference demo."""

import pytest

from uc_engine.demo import DemoConfig, build_demo_instance, run_reference_demo
from uc_engine.validation import ScheduleChecker


class TestDemo:
    """Tests for the demo entry points."""

    def test_demo_instance_applies_policy(self) -> None:
        """Test that demo settings reach the instance."""
        config = DemoConfig(horizon_hours=12, seed=3, reserve_fraction=0.1, emission_cap=900.0)
        instance = build_demo_instance(config)

        assert instance.num_hours == 12
        assert instance.name == "reference_seed3"
        assert instance.policy.reserve_fraction == 0.1
        assert instance.policy.emission_cap == 900.0

    def test_demo_instance_reproducible(self) -> None:
        """Test that the same seed builds the same instance."""
        assert build_demo_instance(DemoConfig(seed=11)) == build_demo_instance(
            DemoConfig(seed=11)
        )

    @pytest.mark.solver
    def test_reference_demo_solves(self) -> None:
        """Test that the reference system always has a feasible schedule."""
        instance, outcome = run_reference_demo(DemoConfig(seed=42))

        assert outcome.is_optimal, outcome.termination_condition
        schedule = outcome.require_schedule()
        assert schedule.num_hours == 24
        assert ScheduleChecker(instance).check(schedule) == []
