"""Synthetic data generators for problem instances."""

from uc_engine.generators.instances import (
    InstanceGenerator,
    reference_battery,
    reference_instance,
    reference_units,
)

__all__ = [
    "InstanceGenerator",
    "reference_battery",
    "reference_instance",
    "reference_units",
]
