from irrigsim.sim.driver import SimulationDriver, run
from irrigsim.sim.factory import SimulatorFactory
from irrigsim.sim.observers import NarrationObserver, StepObserver
from irrigsim.sim.trajectory import Trajectory, TrajectorySummary

__all__ = [
    "SimulationDriver",
    "SimulatorFactory",
    "NarrationObserver",
    "StepObserver",
    "Trajectory",
    "TrajectorySummary",
    "run",
]
