import math
from dataclasses import dataclass, field

import numpy as np

from irrigsim.core.environment.config import NoiseConfig, UniformNoiseConfig
from irrigsim.core.errors import ConfigurationError

_FLOAT_FIELDS = (
    "step_hours",
    "moisture_low_threshold",
    "moisture_high_threshold",
    "irrigation_rate_per_hour",
    "drying_rate_per_hour",
    "drying_reference_temp",
    "min_drying_factor",
    "temp_base",
    "temp_amplitude",
    "temp_high_threshold",
    "noise_amplitude",
    "initial_moisture",
    "initial_temperature",
)


@dataclass(frozen=True, slots=True, kw_only=True)
class SimulationConfig:
    """
    Immutable parameters of one irrigation simulation run.

    Validated on construction; an invalid combination raises
    ConfigurationError before any step can execute.
    """

    # Timeline
    duration_hours: int = 24 * 7  # h
    step_hours: float = 1.0  # h

    # Valve hysteresis band
    moisture_low_threshold: float = 30.0  # %
    moisture_high_threshold: float = 70.0  # %

    # Soil water balance
    irrigation_rate_per_hour: float = 20.0  # %/h while the valve is open
    drying_rate_per_hour: float = 2.0  # %/h at the reference temperature
    drying_reference_temp: float = 20.0  # °C
    min_drying_factor: float = 0.5

    # Daily temperature cycle
    temp_base: float = 20.0  # °C
    temp_amplitude: float = 8.0  # °C
    temp_high_threshold: float = 30.0  # °C
    noise_amplitude: float = 1.0  # °C

    # Seed conditions
    initial_moisture: float = 25.0  # %
    initial_temperature: float = 20.0  # °C

    # Force the valve closed above temp_high_threshold
    temp_override_enabled: bool = False

    noise: NoiseConfig = field(default_factory=UniformNoiseConfig)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check every parameter, raising ConfigurationError on the first violation."""
        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
            if not is_number or not math.isfinite(value):
                raise ConfigurationError(f"{name} must be a finite number (got {value}).")

        if isinstance(self.duration_hours, bool) or not isinstance(self.duration_hours, int):
            raise ConfigurationError("duration_hours must be an integer.")
        if self.duration_hours <= 0:
            raise ConfigurationError("duration_hours must be positive.")
        if self.step_hours <= 0:
            raise ConfigurationError("step_hours must be positive.")
        steps = self.duration_hours / self.step_hours
        if not math.isclose(steps, round(steps), rel_tol=0.0, abs_tol=1e-9):
            raise ConfigurationError(
                f"duration_hours ({self.duration_hours}) must be an integer multiple "
                f"of step_hours ({self.step_hours})."
            )
        if round(steps) < 1:
            raise ConfigurationError(
                f"step_hours ({self.step_hours}) must not exceed duration_hours "
                f"({self.duration_hours}); the run needs at least one step."
            )

        if not (0.0 <= self.moisture_low_threshold < self.moisture_high_threshold <= 100.0):
            raise ConfigurationError(
                "Moisture thresholds must satisfy 0 <= low < high <= 100 "
                f"(got low={self.moisture_low_threshold}, high={self.moisture_high_threshold})."
            )
        if self.irrigation_rate_per_hour <= 0:
            raise ConfigurationError("irrigation_rate_per_hour must be positive.")
        if self.drying_rate_per_hour < 0:
            raise ConfigurationError("drying_rate_per_hour must be non-negative.")
        if self.drying_reference_temp <= 0:
            raise ConfigurationError("drying_reference_temp must be positive.")
        if self.min_drying_factor < 0:
            raise ConfigurationError("min_drying_factor must be non-negative.")

        if self.temp_amplitude < 0:
            raise ConfigurationError("temp_amplitude must be non-negative.")
        if self.noise_amplitude < 0:
            raise ConfigurationError("noise_amplitude must be non-negative.")
        if not (0.0 <= self.initial_moisture <= 100.0):
            raise ConfigurationError("initial_moisture must be between 0 and 100.")

    @property
    def num_steps(self) -> int:
        return int(round(self.duration_hours / self.step_hours))

    def time_axis(self) -> np.ndarray:
        """Start time of every step, in hours."""
        return np.arange(self.num_steps, dtype=float) * self.step_hours
