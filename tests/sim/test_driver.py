"""Tests for the simulation driver."""

from unittest.mock import Mock

import numpy as np
import pytest
from irrigsim.core.config import SimulationConfig
from irrigsim.core.environment.config import UniformNoiseConfig, ZeroNoiseConfig
from irrigsim.core.environment.noise import ZeroNoise
from irrigsim.core.errors import ConfigurationError
from irrigsim.core.state import DecisionReason, StepRecord, ValveState
from irrigsim.sim.driver import SimulationDriver, run
from irrigsim.sim.factory import SimulatorFactory
from irrigsim.sim.observers import NarrationObserver, StepObserver
from irrigsim.sim.trajectory import Trajectory


def deterministic_config(**overrides) -> SimulationConfig:
    return SimulationConfig(noise=ZeroNoiseConfig(), **overrides)


def test_trajectory_length_matches_duration():
    # Act
    trajectory = run(SimulationConfig(duration_hours=168, step_hours=1.0))

    # Assert
    assert len(trajectory) == 168


def test_trajectory_length_with_fractional_step():
    # Act
    trajectory = run(deterministic_config(duration_hours=12, step_hours=0.25))

    # Assert
    assert len(trajectory) == 48
    assert trajectory[-1].time_hours == pytest.approx(11.75)


def test_trajectory_length_single_step():
    # Act
    trajectory = run(deterministic_config(duration_hours=3, step_hours=3.0))

    # Assert
    assert len(trajectory) == 1
    assert trajectory.is_sealed


def test_step_longer_than_duration_rejected_before_run():
    # Act & Assert
    with pytest.raises(ConfigurationError):
        run(deterministic_config(duration_hours=1, step_hours=1e12))


def test_seed_step():
    # Arrange
    config = deterministic_config(
        initial_moisture=25.0, moisture_low_threshold=30.0, moisture_high_threshold=70.0
    )

    # Act
    trajectory = run(config)

    # Assert
    first = trajectory[0]
    assert first.step == 0
    assert first.time_hours == 0.0
    assert first.moisture_percent == 25.0
    assert first.temperature_c == config.initial_temperature
    assert first.valve == ValveState.ON
    assert first.reason == DecisionReason.MOISTURE_LOW


def test_seed_step_in_range_is_off():
    # Act
    trajectory = run(deterministic_config(initial_moisture=50.0))

    # Assert
    assert trajectory[0].valve == ValveState.OFF
    assert trajectory[0].reason == DecisionReason.INITIAL


def test_irrigation_lags_by_one_step():
    # Arrange - no drying, so only irrigation changes moisture
    config = deterministic_config(duration_hours=24, drying_rate_per_hour=0.0, initial_moisture=25.0)

    # Act
    trajectory = run(config)

    # Assert
    first_on = next(r.step for r in trajectory if r.valve == ValveState.ON)
    assert trajectory[first_on].moisture_percent == 25.0
    assert trajectory[first_on + 1].moisture_percent > trajectory[first_on].moisture_percent
    assert trajectory[first_on + 1].moisture_percent == pytest.approx(25.0 + 20.0)


def test_moisture_flat_until_valve_opens():
    # Arrange - no drying and in-range start keeps the valve closed
    config = deterministic_config(duration_hours=24, drying_rate_per_hour=0.0, initial_moisture=50.0)

    # Act
    trajectory = run(config)

    # Assert
    assert np.all(trajectory.moisture == 50.0)
    assert np.all(trajectory.valve == ValveState.OFF)


def test_step_order_follows_dynamics():
    # Arrange
    config = deterministic_config(duration_hours=48)
    driver = SimulationDriver(config)

    # Act
    trajectory = driver.run()

    # Assert - every step is reproducible from its predecessor alone
    env = driver.environment
    for prev, curr in zip(trajectory, trajectory[1:]):
        assert curr.step == prev.step + 1
        assert curr.time_hours > prev.time_hours
        assert curr.temperature_c == pytest.approx(env.next_temperature(curr.time_hours))
        assert curr.moisture_percent == pytest.approx(
            env.next_moisture(prev.moisture_percent, prev.valve, curr.temperature_c)
        )
        assert curr.valve == driver.controller.decide(curr.moisture_percent, prev.valve, curr.temperature_c)


def test_hysteresis_cycle_over_a_week():
    # Act
    trajectory = run(deterministic_config())

    # Assert - valve changes only on threshold crossings
    for prev, curr in zip(trajectory, trajectory[1:]):
        if curr.valve != prev.valve:
            if curr.valve == ValveState.ON:
                assert curr.moisture_percent < 30.0
            else:
                assert curr.moisture_percent > 70.0
    assert trajectory.summary().valve_switches > 0


def test_moisture_never_leaves_bounds_in_long_run():
    # Arrange - every open step overshoots 100 % and every closed step undershoots 0 %
    config = SimulationConfig(
        duration_hours=24 * 30,
        irrigation_rate_per_hour=400.0,
        drying_rate_per_hour=200.0,
        moisture_low_threshold=5.0,
        moisture_high_threshold=95.0,
        noise=UniformNoiseConfig(seed=3),
    )

    # Act
    trajectory = run(config)

    # Assert
    assert trajectory.moisture.min() >= 0.0
    assert trajectory.moisture.max() <= 100.0
    assert trajectory.moisture.min() == 0.0
    assert trajectory.moisture.max() == 100.0


def test_seeded_runs_are_reproducible():
    # Arrange
    config = SimulationConfig(duration_hours=72, noise=UniformNoiseConfig(seed=11))

    # Act
    first = run(config)
    second = run(config)

    # Assert
    np.testing.assert_array_equal(first.temperature, second.temperature)
    np.testing.assert_array_equal(first.moisture, second.moisture)
    np.testing.assert_array_equal(first.valve, second.valve)


def test_driver_rerun_rebuilds_config_noise():
    # Arrange
    driver = SimulationDriver(SimulationConfig(duration_hours=24, noise=UniformNoiseConfig(seed=5)))

    # Act
    first = driver.run().temperature
    second = driver.run().temperature

    # Assert
    np.testing.assert_array_equal(first, second)


def test_injected_noise_source_used():
    # Arrange
    noise = Mock(return_value=0.0)
    config = SimulationConfig(duration_hours=10)

    # Act
    run(config, noise=noise)

    # Assert - no draw at t = 0
    assert noise.call_count == 9


def test_inverted_thresholds_fail_before_any_step():
    # Arrange
    observer = Mock(spec=StepObserver)

    # Act & Assert
    with pytest.raises(ConfigurationError):
        run(
            SimulationConfig(moisture_low_threshold=70.0, moisture_high_threshold=30.0),
            observers=[observer],
        )
    observer.on_step.assert_not_called()


def test_step_before_reset_raises():
    # Arrange
    driver = SimulationDriver(deterministic_config(duration_hours=2))

    # Act & Assert
    with pytest.raises(RuntimeError, match="reset"):
        driver.step()


def test_step_after_completion_raises():
    # Arrange
    driver = SimulationDriver(deterministic_config(duration_hours=2))
    driver.run()

    # Act & Assert
    with pytest.raises(RuntimeError, match="finished"):
        driver.step()


def test_manual_stepping():
    # Arrange
    driver = SimulationDriver(deterministic_config(duration_hours=3))
    driver.reset()

    # Act
    records = [driver.step() for _ in range(3)]

    # Assert
    assert [r.step for r in records] == [0, 1, 2]
    assert driver.is_done is True
    assert driver.trajectory.is_sealed is True
    assert list(driver.trajectory) == records


def test_trajectory_visible_records_are_complete():
    # Arrange
    driver = SimulationDriver(deterministic_config(duration_hours=5))
    driver.reset()

    # Act
    driver.step()
    driver.step()

    # Assert
    assert len(driver.trajectory) == 2
    assert driver.trajectory.is_sealed is False
    assert all(isinstance(r, StepRecord) for r in driver.trajectory)


def test_observers_notified_in_order():
    # Arrange
    observer = Mock(spec=StepObserver)
    config = deterministic_config(duration_hours=4)

    # Act
    trajectory = run(config, observers=[observer])

    # Assert
    assert observer.on_step.call_count == 4
    steps = [c.args[0].step for c in observer.on_step.call_args_list]
    assert steps == [0, 1, 2, 3]
    observer.on_complete.assert_called_once_with(trajectory)


def test_run_returns_sealed_trajectory():
    # Act
    trajectory = run(deterministic_config(duration_hours=6))

    # Assert
    assert isinstance(trajectory, Trajectory)
    assert trajectory.is_sealed


def test_temperature_override_end_to_end():
    # Arrange - hot, dry climate where the low-moisture rule wants water
    config = deterministic_config(
        duration_hours=48,
        temp_base=35.0,
        temp_amplitude=2.0,
        temp_high_threshold=30.0,
        temp_override_enabled=True,
    )

    # Act
    trajectory = run(config)

    # Assert - every step after the seed is above the threshold, so the valve stays shut
    assert trajectory[0].valve == ValveState.ON
    assert all(r.valve == ValveState.OFF for r in trajectory[1:])
    assert trajectory[-1].moisture_percent < config.moisture_low_threshold
    assert trajectory[-1].reason == DecisionReason.HIGH_TEMPERATURE


def test_simulator_factory_adds_narration():
    # Act
    driver = SimulatorFactory.create_simulator(deterministic_config(duration_hours=2), narrate=True)

    # Assert
    assert isinstance(driver, SimulationDriver)
    assert any(isinstance(o, NarrationObserver) for o in driver.observers)


def test_simulator_factory_without_narration():
    # Act
    driver = SimulatorFactory.create_simulator(deterministic_config(duration_hours=2))

    # Assert
    assert driver.observers == ()


def test_zero_noise_injection_matches_zero_noise_config():
    # Arrange
    config = SimulationConfig(duration_hours=24)

    # Act
    injected = run(config, noise=ZeroNoise())
    configured = run(deterministic_config(duration_hours=24))

    # Assert
    np.testing.assert_array_equal(injected.temperature, configured.temperature)
