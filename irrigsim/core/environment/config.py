from dataclasses import dataclass
from typing import Literal, Optional, Union


@dataclass(frozen=True, slots=True, kw_only=True)
class UniformNoiseConfig:
    """Uniform temperature noise in [-1, 1], drawn from a numpy generator."""

    seed: Optional[int] = None

    type: Literal["uniform"] = "uniform"


@dataclass(frozen=True, slots=True, kw_only=True)
class ZeroNoiseConfig:
    """No noise; makes the temperature model fully deterministic."""

    type: Literal["zero"] = "zero"


NoiseConfig = Union[UniformNoiseConfig, ZeroNoiseConfig]
