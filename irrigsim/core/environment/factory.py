from irrigsim.core.environment.config import NoiseConfig
from irrigsim.core.environment.noise import NoiseSource
from irrigsim.core.environment.registry import noise_sources


def build_noise_source(config: NoiseConfig) -> NoiseSource:
    if config.__class__.__name__ not in noise_sources:
        raise ValueError(f"Noise config '{config.__class__.__name__}' not found in registry.")
    noise_cls = noise_sources[config.__class__.__name__]
    return noise_cls(config)
