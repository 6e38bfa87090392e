"""Tests for sensor samples and step records."""

import pytest
from irrigsim.core.errors import NumericBoundViolation
from irrigsim.core.state import (
    DecisionReason,
    SensorSample,
    StepRecord,
    ValveState,
)


def test_valve_state_values():
    # Assert
    assert int(ValveState.OFF) == 0
    assert int(ValveState.ON) == 1


def test_sensor_sample_valid():
    # Act
    sample = SensorSample(time_hours=3.0, moisture_percent=42.0, temperature_c=18.5)

    # Assert
    assert sample.time_hours == 3.0
    assert sample.moisture_percent == 42.0
    assert sample.temperature_c == 18.5


@pytest.mark.parametrize("moisture", [0.0, 100.0])
def test_sensor_sample_accepts_bounds(moisture):
    # Act
    sample = SensorSample(time_hours=0.0, moisture_percent=moisture, temperature_c=20.0)

    # Assert
    assert sample.moisture_percent == moisture


@pytest.mark.parametrize("moisture", [-0.01, 100.01])
def test_sensor_sample_out_of_bounds_raises(moisture):
    # Act & Assert
    with pytest.raises(NumericBoundViolation):
        SensorSample(time_hours=0.0, moisture_percent=moisture, temperature_c=20.0)


def test_sensor_sample_negative_time_raises():
    # Act & Assert
    with pytest.raises(ValueError, match="time_hours"):
        SensorSample(time_hours=-1.0, moisture_percent=50.0, temperature_c=20.0)


def test_step_record_exposes_sample_fields():
    # Arrange
    sample = SensorSample(time_hours=5.0, moisture_percent=33.0, temperature_c=21.0)

    # Act
    record = StepRecord(step=5, sample=sample, valve=ValveState.ON, reason=DecisionReason.IN_RANGE)

    # Assert
    assert record.time_hours == 5.0
    assert record.moisture_percent == 33.0
    assert record.temperature_c == 21.0


def test_step_record_frozen():
    # Arrange
    sample = SensorSample(time_hours=0.0, moisture_percent=25.0, temperature_c=20.0)
    record = StepRecord(step=0, sample=sample, valve=ValveState.ON, reason=DecisionReason.MOISTURE_LOW)

    # Act & Assert
    with pytest.raises(AttributeError):
        record.valve = ValveState.OFF
