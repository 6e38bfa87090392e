from irrigsim.core.config import SimulationConfig
from irrigsim.core.errors import ConfigurationError, NumericBoundViolation
from irrigsim.core.state import ValveState
from irrigsim.sim import SimulationDriver, SimulatorFactory, Trajectory, run

__all__ = [
 "SimulationConfig",
 "ConfigurationError",
 "NumericBoundViolation",
 "ValveState",
 "SimulationDriver",
 "SimulatorFactory",
 "Trajectory",
 "run",
]
