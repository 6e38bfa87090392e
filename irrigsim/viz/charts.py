from typing import Optional

from matplotlib.figure import Figure

from irrigsim.core.config import SimulationConfig
from irrigsim.sim.trajectory import Trajectory


def plot_trajectory(
    trajectory: Trajectory,
    config: SimulationConfig,
    fig: Optional[Figure] = None,
) -> Figure:
    """
    Draw moisture, temperature and valve state against time.

    Three stacked axes share the time axis: moisture with the low/high
    thresholds, temperature with the high-temperature threshold, and the
    valve state as a step plot.
    """
    if fig is None:
        fig = Figure(figsize=(7, 8))
    ax_moisture, ax_temp, ax_valve = fig.subplots(3, 1, sharex=True)

    t = trajectory.times

    ax_moisture.plot(t, trajectory.moisture, "b-", linewidth=1.5, label="Soil Moisture")
    ax_moisture.axhline(config.moisture_low_threshold, color="r", linestyle="--", label="Low Threshold")
    ax_moisture.axhline(config.moisture_high_threshold, color="g", linestyle="--", label="High Threshold")
    ax_moisture.set_title("Soil Moisture Level Over Time")
    ax_moisture.set_ylabel("Soil Moisture (%)")
    ax_moisture.legend(loc="best")
    ax_moisture.grid(True)

    ax_temp.plot(t, trajectory.temperature, "m-", linewidth=1.5, label="Temperature")
    ax_temp.axhline(config.temp_high_threshold, color="k", linestyle="--", label="High Temp Threshold")
    ax_temp.set_title("Ambient Temperature Over Time")
    ax_temp.set_ylabel("Temperature (C)")
    ax_temp.legend(loc="best")
    ax_temp.grid(True)

    ax_valve.step(t, trajectory.valve, "k-", where="post", linewidth=1.5)
    ax_valve.set_title("Irrigation Valve Status Over Time")
    ax_valve.set_xlabel("Time (hours)")
    ax_valve.set_ylabel("Valve Status")
    ax_valve.set_ylim(-0.1, 1.1)
    ax_valve.set_yticks([0, 1])
    ax_valve.set_yticklabels(["OFF", "ON"])
    ax_valve.grid(True)

    fig.suptitle("Smart Irrigation System Simulation (2D Time Series)")
    fig.tight_layout()
    return fig
