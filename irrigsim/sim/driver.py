import logging
from typing import Iterable, Optional, Sequence

from irrigsim.core.config import SimulationConfig
from irrigsim.core.control.controller import ValveController
from irrigsim.core.environment.factory import build_noise_source
from irrigsim.core.environment.model import EnvironmentModel
from irrigsim.core.environment.noise import NoiseSource
from irrigsim.core.state import SensorSample, StepRecord
from irrigsim.sim.observers import StepObserver
from irrigsim.sim.trajectory import Trajectory

logger = logging.getLogger(__name__)


class SimulationDriver:
    """
    Owns the timeline of an irrigation run.

    Each step follows the same order:
    1.  Temperature for the step time.
    2.  Moisture from the previous moisture, the previous valve state and
        the new temperature (seed values at step 0).
    3.  Valve state from the new moisture and the previous valve state.
    4.  Append the complete record and notify observers.

    The environment model and the controller never see the trajectory;
    prior values are passed to them explicitly.
    """

    def __init__(
        self,
        config: SimulationConfig,
        noise: Optional[NoiseSource] = None,
        observers: Iterable[StepObserver] = (),
    ):
        self.config = config
        self._injected_noise = noise
        self.observers: Sequence[StepObserver] = tuple(observers)
        self.controller = ValveController(config)

        self.environment: Optional[EnvironmentModel] = None
        self._trajectory: Optional[Trajectory] = None
        self._step_index: int = 0
        self.is_done: bool = False

    def reset(self) -> None:
        """
        Start a fresh timeline at t = 0.

        A noise source built from the config is rebuilt, so seeded runs
        replay identically. An injected source is reused as is.
        """
        noise = self._injected_noise
        if noise is None:
            noise = build_noise_source(self.config.noise)
        self.environment = EnvironmentModel(self.config, noise)
        self._trajectory = Trajectory(step_hours=self.config.step_hours)
        self._step_index = 0
        self.is_done = False
        logger.debug(
            "Reset simulation: %d steps of %g h", self.config.num_steps, self.config.step_hours
        )

    def step(self) -> StepRecord:
        """
        Advance the simulation by one step.

        Returns:
            The appended record. After the final step is_done is set and the
            trajectory is sealed.
        """
        if self._trajectory is None:
            raise RuntimeError("Simulation must be reset before stepping.")
        if self.is_done:
            raise RuntimeError("Simulation is finished. Call reset() to start a new run.")

        i = self._step_index
        previous = self._trajectory[i - 1] if i > 0 else None
        prev_moisture = previous.moisture_percent if previous else None
        prev_valve = previous.valve if previous else None

        time_hours = i * self.config.step_hours
        temperature = self.environment.next_temperature(time_hours)
        moisture = self.environment.next_moisture(prev_moisture, prev_valve, temperature)
        decision = self.controller.evaluate(moisture, prev_valve, temperature)

        record = StepRecord(
            step=i,
            sample=SensorSample(
                time_hours=time_hours,
                moisture_percent=moisture,
                temperature_c=temperature,
            ),
            valve=decision.state,
            reason=decision.reason,
        )
        self._trajectory.append(record)
        self._step_index += 1
        logger.debug(
            "Step %d: t=%g h, moisture=%.2f %%, temperature=%.2f C, valve=%s (%s)",
            i, time_hours, moisture, temperature, decision.state.name, decision.reason.value,
        )

        for observer in self.observers:
            observer.on_step(record)

        if self._step_index >= self.config.num_steps:
            self._finish()
        return record

    def run(self) -> Trajectory:
        """Run from t = 0 to completion and return the sealed trajectory."""
        self.reset()
        while not self.is_done:
            self.step()
        return self._trajectory

    def _finish(self) -> None:
        self.is_done = True
        self._trajectory.seal()
        for observer in self.observers:
            observer.on_complete(self._trajectory)

    @property
    def trajectory(self) -> Trajectory:
        if self._trajectory is None:
            raise RuntimeError("Simulation has not been reset yet.")
        return self._trajectory

    def __repr__(self) -> str:
        return (
            f"<SimulationDriver("
            f"num_steps={self.config.num_steps}, "
            f"current_step={self._step_index}, "
            f"is_done={self.is_done})>"
        )


def run(
    config: SimulationConfig,
    noise: Optional[NoiseSource] = None,
    observers: Iterable[StepObserver] = (),
) -> Trajectory:
    """Run a complete simulation for the given configuration."""
    return SimulationDriver(config, noise=noise, observers=observers).run()
