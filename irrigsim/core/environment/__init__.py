from irrigsim.core.environment.config import (
    NoiseConfig,
    UniformNoiseConfig,
    ZeroNoiseConfig,
)
from irrigsim.core.environment.noise import * # noqa: F403, F401 # register all noise sources

__all__ = [
    "NoiseConfig",
    "UniformNoiseConfig",
    "ZeroNoiseConfig",
]
