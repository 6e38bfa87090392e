import logging
from abc import ABC, abstractmethod

from irrigsim.core.state import DecisionReason, StepRecord, ValveState
from irrigsim.sim.trajectory import Trajectory

logger = logging.getLogger(__name__)


class StepObserver(ABC):
    """Read-only listener notified by the driver as records are appended."""

    @abstractmethod
    def on_step(self, record: StepRecord) -> None:
        pass

    def on_complete(self, trajectory: Trajectory) -> None:
        pass


class NarrationObserver(StepObserver):
    """Writes a human-readable account of every step to the log."""

    def __init__(self, hours_per_day: float = 24.0, name: str = __name__):
        self.hours_per_day = hours_per_day
        self.logger = logging.getLogger(name)

    def on_step(self, record: StepRecord) -> None:
        t = record.time_hours
        if t % self.hours_per_day == 0:
            self.logger.info("--- Day %d ---", int(t // self.hours_per_day) + 1)
        self.logger.info("Time: %g hours", t)
        self.logger.info("  Current Temperature: %.2f C", record.temperature_c)
        self.logger.info("  Current Soil Moisture: %.2f %%", record.moisture_percent)
        self.logger.info("  Decision: %s", describe_decision(record))
        self.logger.info("  Actuator: Valve is %s.", record.valve.name)

    def on_complete(self, trajectory: Trajectory) -> None:
        self.logger.info("Simulation Complete. %d steps recorded.", len(trajectory))


def describe_decision(record: StepRecord) -> str:
    moisture = record.moisture_percent
    match record.reason:
        case DecisionReason.MOISTURE_LOW:
            return f"Soil moisture LOW ({moisture:.1f}%). Turning valve ON."
        case DecisionReason.MOISTURE_HIGH:
            return f"Soil moisture HIGH ({moisture:.1f}%). Turning valve OFF."
        case DecisionReason.IN_RANGE:
            return f"Soil moisture ({moisture:.1f}%) in range. Valve remains {record.valve.name}."
        case DecisionReason.INITIAL:
            return "Initial state check, valve OFF."
        case DecisionReason.HIGH_TEMPERATURE:
            return (
                f"Temperature HIGH ({record.temperature_c:.1f} C). "
                f"Holding valve {ValveState.OFF.name}."
            )
        case _:
            raise ValueError(f"Unknown decision reason: {record.reason}")
