import math
from typing import Optional

from irrigsim.core.config import SimulationConfig
from irrigsim.core.environment.noise import NoiseSource, ZeroNoise
from irrigsim.core.state import ValveState

DAY_HOURS = 24.0
MOISTURE_MIN = 0.0
MOISTURE_MAX = 100.0


def clamp_moisture(value: float) -> float:
    """Clamp a soil moisture value to [0, 100] %."""
    return max(MOISTURE_MIN, min(MOISTURE_MAX, value))


class EnvironmentModel:
    """
    Soil moisture and ambient temperature dynamics for one step.

    Both updates are functions of their explicit arguments and the
    configuration. The only non-determinism is the injected noise source,
    which perturbs temperature.
    """

    def __init__(self, config: SimulationConfig, noise: Optional[NoiseSource] = None):
        self.config = config
        self.noise = noise if noise is not None else ZeroNoise()

    def next_temperature(self, time_hours: float) -> float:
        """
        Ambient temperature at the given time.

        A sinusoidal daily cycle, lowest at midnight and highest at noon,
        plus a bounded perturbation. The first sample (t = 0) is the
        configured initial temperature and consumes no noise.
        """
        if time_hours == 0:
            return self.config.initial_temperature

        daily_cycle = math.sin(2 * math.pi * time_hours / DAY_HOURS - math.pi / 2)
        return (
            self.config.temp_base
            + self.config.temp_amplitude * daily_cycle
            + self.config.noise_amplitude * self.noise()
        )

    def temp_factor(self, temperature: float) -> float:
        """Drying multiplier, linear in temperature around the reference and floored."""
        return max(
            self.config.min_drying_factor,
            temperature / self.config.drying_reference_temp,
        )

    def next_moisture(
        self,
        prev_moisture: Optional[float],
        prev_valve: Optional[ValveState],
        temperature: float,
    ) -> float:
        """
        Advance soil moisture by one step.

        Args:
            prev_moisture: Moisture of the previous step, or None at the seed step
            prev_valve: Valve state of the previous step; irrigation lags by one step
            temperature: Temperature of the current step

        Returns:
            Moisture in [0, 100] %
        """
        if prev_moisture is None:
            return self.config.initial_moisture

        dt = self.config.step_hours
        moisture = prev_moisture
        moisture -= self.config.drying_rate_per_hour * dt * self.temp_factor(temperature)

        if prev_valve == ValveState.ON:
            moisture += self.config.irrigation_rate_per_hour * dt

        return clamp_moisture(moisture)
