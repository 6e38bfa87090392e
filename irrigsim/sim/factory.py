from typing import Iterable

from irrigsim.core.config import SimulationConfig
from irrigsim.sim.driver import SimulationDriver
from irrigsim.sim.observers import NarrationObserver, StepObserver


class SimulatorFactory:
    @staticmethod
    def create_simulator(
        config: SimulationConfig,
        narrate: bool = False,
        observers: Iterable[StepObserver] = (),
    ) -> SimulationDriver:
        """Create a driver whose noise source is rebuilt from the config on every reset."""
        observers = list(observers)
        if narrate:
            observers.append(NarrationObserver())
        return SimulationDriver(config, observers=observers)
