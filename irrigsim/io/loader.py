"""Load a SimulationConfig from a YAML file or a plain mapping."""

import logging
from pathlib import Path
from typing import Any, Mapping, Union

import dacite
import yaml

from irrigsim.core.config import SimulationConfig
from irrigsim.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

_DACITE_CONFIG = dacite.Config(strict=True, cast=[float])


def config_from_dict(data: Mapping[str, Any]) -> SimulationConfig:
    """
    Build a SimulationConfig from a mapping.

    Unknown keys and ill-typed values raise ConfigurationError, as do
    parameter combinations rejected by SimulationConfig itself.
    """
    try:
        return dacite.from_dict(SimulationConfig, dict(data), config=_DACITE_CONFIG)
    except ConfigurationError:
        raise
    except (dacite.DaciteError, ValueError, TypeError) as e:
        raise ConfigurationError(f"Invalid simulation configuration: {e}") from e


def load_config(path: Union[str, Path]) -> SimulationConfig:
    """Read a YAML file holding the simulation parameters at its top level."""
    with open(path, "r") as file:
        yaml_cfg = yaml.safe_load(file) or {}

    if not isinstance(yaml_cfg, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping.")

    config = config_from_dict(yaml_cfg)
    logger.info("Loaded simulation configuration from %s", path)
    return config
