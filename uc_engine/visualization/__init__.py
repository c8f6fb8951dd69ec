"""Matplotlib plots for dispatch schedules.

- DispatchTimeline: supply stack, unit commitment and battery SOC plots
"""

from uc_engine.visualization.timeline import (
    DispatchTimeline,
    TimelinePlotConfig,
    create_dispatch_timeline,
)

__all__ = [
    "DispatchTimeline",
    "TimelinePlotConfig",
    "create_dispatch_timeline",
]
