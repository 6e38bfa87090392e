from dataclasses import dataclass
from typing import Iterator, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.animation import FuncAnimation

from irrigsim.core.state import StepRecord, ValveState
from irrigsim.sim.trajectory import Trajectory

RGB = Tuple[float, float, float]

DRY_COLOR: RGB = (0.6, 0.4, 0.2)  # brown
WET_COLOR: RGB = (0.1, 0.5, 0.8)  # blue-green
VALVE_ON_COLOR = "green"
VALVE_OFF_COLOR = "red"

# Scene geometry
BAR_HALF_WIDTH = 4.0
VALVE_INDICATOR_BASE_Z = 105.0
VALVE_INDICATOR_HEIGHT = 10.0
VALVE_INDICATOR_OFFSET = 8.0


@dataclass(frozen=True, slots=True)
class SceneFrame:
    """Visual state of the 3D scene for one trajectory step."""

    step: int
    bar_height: float
    bar_color: RGB
    valve_color: str
    valve_visible: bool
    title: str


def moisture_color(moisture_percent: float) -> RGB:
    """Blend from the dry colour at 0 % to the wet colour at 100 %."""
    w = max(0.0, min(1.0, moisture_percent / 100.0))
    return tuple(float(d * (1 - w) + c * w) for d, c in zip(DRY_COLOR, WET_COLOR))


def frame_for(record: StepRecord) -> SceneFrame:
    height = max(0.0, record.moisture_percent)
    return SceneFrame(
        step=record.step,
        bar_height=height,
        bar_color=moisture_color(height),
        valve_color=VALVE_ON_COLOR if record.valve == ValveState.ON else VALVE_OFF_COLOR,
        valve_visible=True,
        title=(
            f"Time: {record.time_hours:g} hrs | Soil Moisture: {record.moisture_percent:.1f}% "
            f"| Valve: {record.valve.name}"
        ),
    )


def scene_frames(trajectory: Trajectory) -> Iterator[SceneFrame]:
    for record in trajectory:
        yield frame_for(record)


def animate_scene(trajectory: Trajectory, interval_ms: int = 50):
    """
    Animate the trajectory as a moisture bar with a valve indicator cone.

    Needs an interactive matplotlib backend to display; the returned
    FuncAnimation must be kept referenced while it plays.
    """
    frames = list(scene_frames(trajectory))

    fig = plt.figure("3D Smart Irrigation Animation", figsize=(7, 5.5))
    ax = fig.add_subplot(projection="3d")

    # Cone above the bar for the valve indicator
    theta = np.linspace(0, 2 * np.pi, 13)
    radius = np.array([2.0, 0.0])
    cone_x = np.outer(radius, np.cos(theta)) + VALVE_INDICATOR_OFFSET
    cone_y = np.outer(radius, np.sin(theta)) + VALVE_INDICATOR_OFFSET
    cone_z = np.outer([0.0, 1.0], np.ones_like(theta)) * VALVE_INDICATOR_HEIGHT + VALVE_INDICATOR_BASE_Z

    def draw(frame: SceneFrame):
        ax.clear()
        ax.set_xlim(-15, 15)
        ax.set_ylim(-15, 15)
        ax.set_zlim(0, 120)
        ax.set_xlabel("X-axis")
        ax.set_ylabel("Y-axis")
        ax.set_zlabel("Moisture Level / Valve Status")
        ax.view_init(elev=25, azim=35)
        ax.bar3d(
            -BAR_HALF_WIDTH, -BAR_HALF_WIDTH, 0.0,
            2 * BAR_HALF_WIDTH, 2 * BAR_HALF_WIDTH, frame.bar_height,
            color=frame.bar_color, edgecolor="black", alpha=0.8,
        )
        if frame.valve_visible:
            ax.plot_surface(cone_x, cone_y, cone_z, color=frame.valve_color, linewidth=0)
        ax.set_title(frame.title)
        return ()

    return FuncAnimation(fig, draw, frames=frames, interval=interval_ms, repeat=False)
