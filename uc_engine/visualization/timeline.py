"""Dispatch timeline visualizer for unit commitment schedules.

Generates plots for:
- Stacked supply (fossil units, renewables, battery discharge) vs demand
- Unit commitment (on/off) over time
- Battery SOC over time
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from uc_engine.domain.models import Schedule


@dataclass
class TimelinePlotConfig:
    """Configuration for timeline plots.

    Attributes:
        figsize: Figure size (width, height) in inches.
        dpi: Dots per inch for figure resolution.
        colors: Color scheme for non-unit series.
        unit_cmap: Colormap used to color fossil units.
        title_fontsize: Font size for plot titles.
        label_fontsize: Font size for axis labels.
        legend_fontsize: Font size for legend.
        grid_alpha: Alpha value for grid lines.
        save_format: Format for saving figures.
    """

    figsize: tuple[float, float] = (14, 10)
    dpi: int = 100
    colors: dict[str, str] = field(
        default_factory=lambda: {
            "renewable": "#2ecc71",
            "curtailed": "#e74c3c",
            "charge": "#9b59b6",
            "discharge": "#f39c12",
            "demand": "#34495e",
            "soc": "#1abc9c",
            "capacity": "#c0392b",
        }
    )
    unit_cmap: str = "Blues"
    title_fontsize: int = 14
    label_fontsize: int = 12
    legend_fontsize: int = 10
    grid_alpha: float = 0.3
    save_format: str = "png"


class DispatchTimeline:
    """Visualizer for dispatch schedules.

    Example:
        ```python
        timeline = DispatchTimeline()
        fig = timeline.plot_dashboard(schedule, battery_capacity_mwh=50.0)
        fig.savefig("dispatch.png")
        ```
    """

    def __init__(self, config: TimelinePlotConfig | None = None) -> None:
        self.config = config or TimelinePlotConfig()

    def _unit_colors(self, n_units: int) -> list:
        cmap = matplotlib.colormaps[self.config.unit_cmap]
        return [cmap(x) for x in np.linspace(0.45, 0.9, max(n_units, 1))]

    def plot_supply_stack(
        self,
        schedule: Schedule,
        ax: plt.Axes | None = None,
        show_legend: bool = True,
    ) -> plt.Axes:
        """Plot stacked supply by source against demand.

        Args:
            schedule: Schedule to plot.
            ax: Matplotlib axes to plot on (creates new if None).
            show_legend: Whether to show the legend.

        Returns:
            Matplotlib axes with the plot.
        """
        if ax is None:
            _, ax = plt.subplots(figsize=(12, 6))

        colors = self.config.colors
        hours = [h.hour for h in schedule.hours]
        n_units = len(schedule.hours[0].units) if schedule.hours else 0

        unit_colors = self._unit_colors(n_units)
        layers = [
            (schedule.generation(f), schedule.hours[0].units[f].name, unit_colors[f])
            for f in range(n_units)
        ]
        layers.append(
            (
                [h.renewable_used_mw for h in schedule.hours],
                "Renewable",
                colors["renewable"],
            )
        )
        layers.append(
            (
                [h.discharge_mw for h in schedule.hours],
                "Battery Discharge",
                colors["discharge"],
            )
        )

        # Stacked area chart
        bottom = np.zeros(len(hours))
        for series, label, color in layers:
            top = bottom + np.asarray(series)
            ax.fill_between(
                hours, bottom, top, step="mid", alpha=0.8, color=color, label=label
            )
            bottom = top

        charge = np.asarray([h.charge_mw for h in schedule.hours])
        if charge.any():
            ax.bar(
                hours,
                -charge,
                width=0.6,
                color=colors["charge"],
                alpha=0.7,
                label="Battery Charge",
            )

        ax.plot(
            hours,
            [h.demand_mw for h in schedule.hours],
            color=colors["demand"],
            linewidth=2,
            linestyle="--",
            marker="o",
            markersize=4,
            label="Demand",
        )

        ax.set_xlabel("Hour", fontsize=self.config.label_fontsize)
        ax.set_ylabel("Power (MW)", fontsize=self.config.label_fontsize)
        ax.set_title("Dispatch by Source", fontsize=self.config.title_fontsize)
        ax.grid(True, alpha=self.config.grid_alpha)

        if show_legend:
            ax.legend(loc="upper left", fontsize=self.config.legend_fontsize)

        return ax

    def plot_commitment(self, schedule: Schedule, ax: plt.Axes | None = None) -> plt.Axes:
        """Plot unit on/off states as a heatmap (units x hours)."""
        if ax is None:
            _, ax = plt.subplots(figsize=(12, 3))

        ax.set_xlabel("Hour", fontsize=self.config.label_fontsize)
        ax.set_title("Unit Commitment", fontsize=self.config.title_fontsize)

        n_units = len(schedule.hours[0].units) if schedule.hours else 0
        if n_units == 0:
            return ax

        grid = np.array(
            [[1.0 if on else 0.0 for on in schedule.commitment(f)] for f in range(n_units)]
        )

        ax.imshow(
            grid,
            aspect="auto",
            cmap=self.config.unit_cmap,
            vmin=0,
            vmax=1,
            interpolation="nearest",
            extent=(0.5, schedule.num_hours + 0.5, n_units - 0.5, -0.5),
        )
        ax.set_yticks(range(n_units))
        ax.set_yticklabels([u.name for u in schedule.hours[0].units])

        return ax

    def plot_battery_soc(
        self,
        schedule: Schedule,
        battery_capacity_mwh: float,
        ax: plt.Axes | None = None,
        show_legend: bool = True,
    ) -> plt.Axes:
        """Plot battery state of charge over time.

        Args:
            schedule: Schedule to plot.
            battery_capacity_mwh: Battery capacity for reference line.
            ax: Matplotlib axes to plot on (creates new if None).
            show_legend: Whether to show the legend.

        Returns:
            Matplotlib axes with the plot.
        """
        if ax is None:
            _, ax = plt.subplots(figsize=(12, 4))

        colors = self.config.colors
        hours = [h.hour for h in schedule.hours]
        soc = [h.soc_mwh for h in schedule.hours]

        ax.fill_between(hours, 0, soc, alpha=0.5, color=colors["soc"])
        ax.plot(
            hours,
            soc,
            color=colors["soc"],
            linewidth=2,
            marker="s",
            markersize=4,
            label="State of Charge",
        )
        ax.axhline(
            y=battery_capacity_mwh,
            color=colors["capacity"],
            linestyle="--",
            linewidth=1.5,
            label=f"Capacity ({battery_capacity_mwh:.0f} MWh)",
        )

        ax.set_xlabel("Hour", fontsize=self.config.label_fontsize)
        ax.set_ylabel("SOC (MWh)", fontsize=self.config.label_fontsize)
        ax.set_title("Battery State of Charge", fontsize=self.config.title_fontsize)
        ax.set_ylim(0, max(battery_capacity_mwh, 1.0) * 1.1)
        ax.grid(True, alpha=self.config.grid_alpha)

        if show_legend:
            ax.legend(loc="upper right", fontsize=self.config.legend_fontsize)

        return ax

    def plot_dashboard(
        self,
        schedule: Schedule,
        battery_capacity_mwh: float,
        title: str = "Day-Ahead Dispatch",
        save_path: str | Path | None = None,
    ) -> Figure:
        """Create a dashboard with supply, commitment and SOC plots.

        Args:
            schedule: Schedule to plot.
            battery_capacity_mwh: Battery capacity for the SOC plot.
            title: Main title for the dashboard.
            save_path: Path to save the figure (optional).

        Returns:
            Matplotlib Figure object.
        """
        fig, axes = plt.subplots(
            3,
            1,
            figsize=self.config.figsize,
            height_ratios=[2, 1, 1],
        )

        self.plot_supply_stack(schedule, ax=axes[0])
        self.plot_commitment(schedule, ax=axes[1])
        self.plot_battery_soc(
            schedule, battery_capacity_mwh=battery_capacity_mwh, ax=axes[2]
        )

        fig.suptitle(title, fontsize=self.config.title_fontsize + 2, fontweight="bold")
        plt.tight_layout()

        if save_path:
            fig.savefig(
                save_path,
                dpi=self.config.dpi,
                format=self.config.save_format,
                bbox_inches="tight",
            )

        return fig


def create_dispatch_timeline(
    schedule: Schedule,
    battery_capacity_mwh: float,
    title: str = "Day-Ahead Dispatch",
    save_path: str | Path | None = None,
) -> Figure:
    """Convenience function to create a dispatch dashboard."""
    return DispatchTimeline().plot_dashboard(
        schedule,
        battery_capacity_mwh=battery_capacity_mwh,
        title=title,
        save_path=save_path,
    )
