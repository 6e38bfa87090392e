from dataclasses import dataclass
from enum import Enum, IntEnum

from irrigsim.core.errors import NumericBoundViolation


class ValveState(IntEnum):
    """Irrigation valve command. Integer values plot directly as 0/1."""

    OFF = 0
    ON = 1


class DecisionReason(str, Enum):
    """Which controller rule produced a valve state."""

    MOISTURE_LOW = "moisture_low"
    MOISTURE_HIGH = "moisture_high"
    IN_RANGE = "in_range"
    INITIAL = "initial"
    HIGH_TEMPERATURE = "high_temperature"


@dataclass(frozen=True, slots=True)
class SensorSample:
    """Environment readings at the start of one step."""

    time_hours: float  # h
    moisture_percent: float  # %
    temperature_c: float  # °C

    def __post_init__(self):
        if self.time_hours < 0:
            raise ValueError("time_hours must be non-negative.")
        if not (0.0 <= self.moisture_percent <= 100.0):
            raise NumericBoundViolation(
                f"Soil moisture {self.moisture_percent}% is outside [0, 100]."
            )


@dataclass(frozen=True, slots=True)
class ValveDecision:
    state: ValveState
    reason: DecisionReason


@dataclass(frozen=True, slots=True)
class StepRecord:
    """
    One completed simulation step.

    Only built once every field is known, so a record is never partial.
    """

    step: int
    sample: SensorSample
    valve: ValveState
    reason: DecisionReason

    @property
    def time_hours(self) -> float:
        return self.sample.time_hours

    @property
    def moisture_percent(self) -> float:
        return self.sample.moisture_percent

    @property
    def temperature_c(self) -> float:
        return self.sample.temperature_c
