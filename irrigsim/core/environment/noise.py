from abc import ABC, abstractmethod

import numpy as np

from irrigsim.core.environment.config import UniformNoiseConfig, ZeroNoiseConfig
from irrigsim.core.environment.registry import register_noise_source


class NoiseSource(ABC):
    """
    Injectable source of temperature perturbations.

    Every draw lies in [-1, 1]; the environment model scales it by the
    configured noise amplitude.
    """

    @abstractmethod
    def __call__(self) -> float:
        pass


@register_noise_source(UniformNoiseConfig)
class UniformNoise(NoiseSource):
    def __init__(self, config: UniformNoiseConfig):
        self.config = config
        self._rng = np.random.default_rng(config.seed)

    def __call__(self) -> float:
        return float(self._rng.uniform(-1.0, 1.0))


@register_noise_source(ZeroNoiseConfig)
class ZeroNoise(NoiseSource):
    def __init__(self, config: ZeroNoiseConfig = ZeroNoiseConfig()):
        self.config = config

    def __call__(self) -> float:
        return 0.0
